import os
import sys
import textwrap
from pathlib import Path

import pytest

# Keep the repository free of Python bytecode and __pycache__ artifacts during tests.
sys.dont_write_bytecode = True

TESTS_ROOT = Path(__file__).resolve().parent
REPO_ROOT = TESTS_ROOT.parent
SRC_ROOT = REPO_ROOT / "src"

# Make src/ importable as 'inilayer'
for p in (SRC_ROOT, TESTS_ROOT):
    if str(p) not in sys.path:
        sys.path.insert(0, str(p))


from inilayer.core.config import Config
from inilayer.core.settings import ENV_PREFIX, Settings
from inilayer.core.stdlib_logging import reset_logging_for_tests


@pytest.fixture(autouse=True)
def _isolated_environment(monkeypatch):
    """Settings must not pick up INILAYER_* variables from the developer shell."""
    for key in list(os.environ):
        if key.startswith(ENV_PREFIX):
            monkeypatch.delenv(key, raising=False)
    yield
    reset_logging_for_tests()


@pytest.fixture
def config_dir(tmp_path: Path) -> Path:
    d = tmp_path / "config"
    d.mkdir()
    return d


@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    return Settings(user_path=tmp_path)


@pytest.fixture
def write_global(config_dir: Path):
    def _write(text: str) -> Path:
        path = config_dir / "global.ini.php"
        path.write_text(textwrap.dedent(text).lstrip(), encoding="utf-8")
        return path

    return _write


@pytest.fixture
def write_local(config_dir: Path):
    def _write(text: str, filename: str = "config.ini.php") -> Path:
        path = config_dir / filename
        path.write_text(textwrap.dedent(text).lstrip(), encoding="utf-8")
        return path

    return _write


@pytest.fixture
def make_config(settings: Settings):
    """Build a Config over the tmp_path installation."""

    def _make(**kwargs) -> Config:
        return Config(settings, **kwargs)

    return _make
