from __future__ import annotations

from pathlib import Path

import pytest

from inilayer.core.config.hostname import (
    HostnameConfigInfo,
    by_domain_config_path,
    is_valid_filename,
    local_config_info_for_hostname,
)


@pytest.mark.parametrize(
    "name",
    ["config.ini.php", "stats.example.com.config.ini.php", "a", "host-1_b.config.ini.php", "127.0.0.1.config.ini.php"],
)
def test_valid_filenames(name: str) -> None:
    assert is_valid_filename(name)


@pytest.mark.parametrize(
    "name",
    ["", ".config.ini.php", "../x", "a/b", "a\\b", "a\x00b", "a b", "host:8080.config.ini.php", "-x", "_x"],
)
def test_invalid_filenames(name: str) -> None:
    assert not is_valid_filename(name)


def test_local_config_info_for_hostname(tmp_path: Path) -> None:
    info = local_config_info_for_hostname(tmp_path, "x.example.com", ".config.ini.php")
    assert info == HostnameConfigInfo(
        file="x.example.com.config.ini.php", path=tmp_path / "x.example.com.config.ini.php"
    )


def test_by_domain_config_path(tmp_path: Path) -> None:
    suffix = ".config.ini.php"
    assert by_domain_config_path(tmp_path, None, suffix) is None
    assert by_domain_config_path(tmp_path, "", suffix) is None
    assert by_domain_config_path(tmp_path, "x.example.com", suffix) is None

    (tmp_path / "x.example.com.config.ini.php").write_text("", encoding="utf-8")
    assert by_domain_config_path(tmp_path, "x.example.com", suffix) == tmp_path / "x.example.com.config.ini.php"
