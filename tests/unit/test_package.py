from __future__ import annotations

from pathlib import Path

import pytest

import inilayer
from inilayer import Config, Scalar


def test_public_exports() -> None:
    for name in inilayer.__all__:
        assert hasattr(inilayer, name), name


def test_config_reads_settings_from_environment(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    etc = tmp_path / "etc"
    etc.mkdir()
    (etc / "defaults.ini").write_text("[General]\ntimeout = 5\n", encoding="utf-8")
    monkeypatch.setenv("INILAYER_paths__userPath", str(tmp_path))
    monkeypatch.setenv("INILAYER_paths__configDir", "etc")
    monkeypatch.setenv("INILAYER_paths__globalFile", "defaults.ini")

    cfg = Config()
    assert cfg.path_global == etc / "defaults.ini"
    assert cfg.get("General") == {"timeout": Scalar("5")}
