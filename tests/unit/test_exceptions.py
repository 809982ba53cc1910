from __future__ import annotations

import pytest

from inilayer.core.exceptions import (
    ConfigFileNotFoundError,
    ConfigFileNotWritableError,
    InilayerError,
    InvalidHostnameError,
    SettingsError,
    UndefinedSectionError,
)


def test_base_error_context_is_copied() -> None:
    ctx = {"a": 1}
    err = InilayerError("boom", context=ctx)
    ctx["a"] = 2
    assert err.context == {"a": 1}
    assert err.to_json_error() == {"message": "boom", "code": "InilayerError", "context": {"a": 1}}


@pytest.mark.parametrize(
    "err,builtin",
    [
        (ConfigFileNotFoundError("/x/global.ini.php"), FileNotFoundError),
        (ConfigFileNotWritableError("config/config.ini.php"), PermissionError),
        (UndefinedSectionError("General"), LookupError),
        (InvalidHostnameError("../x"), ValueError),
        (SettingsError("bad"), ValueError),
    ],
)
def test_errors_are_catchable_as_builtins(err: InilayerError, builtin: type) -> None:
    assert isinstance(err, InilayerError)
    assert isinstance(err, builtin)
    with pytest.raises(builtin):
        raise err


def test_error_payloads() -> None:
    nf = ConfigFileNotFoundError("/x/global.ini.php", reason="could not be parsed or is empty")
    assert nf.path == "/x/global.ini.php"
    assert nf.to_json_error()["context"] == {
        "path": "/x/global.ini.php",
        "reason": "could not be parsed or is empty",
    }
    assert "/x/global.ini.php" in str(nf)

    nw = ConfigFileNotWritableError("config/config.ini.php")
    assert "(config/config.ini.php)" in str(nw)
    assert nw.to_json_error()["code"] == "ConfigFileNotWritableError"

    us = UndefinedSectionError("General")
    assert "'General'" in str(us)
    assert us.context == {"section": "General"}

    ih = InvalidHostnameError("a/b")
    assert str(ih) == "Hostname is not valid"
    assert ih.context == {"hostname": "a/b"}
