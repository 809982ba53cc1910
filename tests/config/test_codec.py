from __future__ import annotations

import logging
from pathlib import Path

from inilayer.core.config import HEADER, parse, parse_string, serialize
from inilayer.core.values import ListValue, Scalar


def test_parse_string_sections_keys_and_lists() -> None:
    doc = parse_string(
        """
        ; <?php exit; ?> DO NOT REMOVE THIS LINE
        [General]
        timeout = 5
        name = "My site"   ; trailing comment
        plain = hello ; comment after unquoted value

        [Plugins]
        Plugins[] = "A"
        Plugins[] = "B"
        """
    )
    assert list(doc) == ["General", "Plugins"]
    assert doc["General"] == {
        "timeout": Scalar("5"),
        "name": Scalar("My site"),
        "plain": Scalar("hello"),
    }
    assert doc["Plugins"] == {"Plugins": ListValue(("A", "B"))}


def test_parse_string_single_quotes_and_empty_values() -> None:
    doc = parse_string("[s]\na = 'x ; y'\nb = \"\"\nc =\n")
    assert doc["s"] == {"a": Scalar("x ; y"), "b": Scalar(""), "c": Scalar("")}


def test_parse_string_later_scalar_replaces_list_and_vice_versa() -> None:
    doc = parse_string("[s]\nk[] = 1\nk[] = 2\nk = 3\nj = 1\nj[] = 2\nj[] = 3\n")
    assert doc["s"]["k"] == Scalar("3")
    assert doc["s"]["j"] == ListValue(("2", "3"))


def test_parse_string_reopened_section_merges() -> None:
    doc = parse_string("[s]\na = 1\nl[] = x\n[t]\nb = 2\n[s]\nc = 3\nl[] = y\n")
    assert doc["s"] == {"a": Scalar("1"), "l": ListValue(("x", "y")), "c": Scalar("3")}
    assert list(doc) == ["s", "t"]


def test_parse_string_skips_junk_with_warning(caplog) -> None:
    with caplog.at_level(logging.WARNING, logger="inilayer"):
        doc = parse_string("orphan = 1\n[s]\nnot a pair\n[broken\nk = v\n")
    assert doc == {"s": {"k": Scalar("v")}}
    messages = " ".join(r.getMessage() for r in caplog.records)
    assert "outside of any section" in messages
    assert "unrecognised line" in messages
    assert "unterminated section header" in messages


def test_parse_missing_file_returns_empty(tmp_path: Path) -> None:
    assert parse(tmp_path / "nope.ini.php") == {}


def test_parse_undecodable_file_returns_empty(tmp_path: Path) -> None:
    path = tmp_path / "bad.ini.php"
    path.write_bytes(b"[s]\nk = \xff\xfe\n")
    assert parse(path) == {}


def test_parse_reads_file(tmp_path: Path) -> None:
    path = tmp_path / "global.ini.php"
    path.write_text("[General]\ntimeout = 5\n", encoding="utf-8")
    assert parse(path) == {"General": {"timeout": Scalar("5")}}


def test_serialize_quotes_non_numeric_and_skips_empty_sections() -> None:
    text = serialize(
        {
            "General": {"timeout": Scalar("10"), "ratio": Scalar("-0.5"), "name": Scalar("abc")},
            "Empty": {},
            "Plugins": {"Plugins": ListValue(("A", "12"))},
        }
    )
    lines = text.splitlines()
    assert lines[: len(HEADER)] == list(HEADER)
    assert lines[len(HEADER):] == [
        "[General]",
        "timeout = 10",
        "ratio = -0.5",
        'name = "abc"',
        "",
        "[Plugins]",
        'Plugins[] = "A"',
        'Plugins[] = "12"',
        "",
    ]
    assert "[Empty]" not in text


def test_serialize_skips_empty_lists_and_sections_left_without_lines() -> None:
    text = serialize(
        {
            "Plugins": {"Plugins": ListValue(())},
            "General": {"timeout": Scalar("5"), "hosts": ListValue(())},
        }
    )
    assert text.splitlines()[len(HEADER):] == ["[General]", "timeout = 5", ""]


def test_parse_string_only_splits_on_newlines() -> None:
    text = '[General]\r\nnote = "a\u2028b\x0cc"\r\n'
    assert parse_string(text) == {"General": {"note": Scalar("a\u2028b\x0cc")}}


def test_serialize_empty_document_is_header_only() -> None:
    assert serialize({}) == "\n".join(HEADER) + "\n"


def test_parse_serialize_round_trip() -> None:
    doc = {
        "General": {"timeout": Scalar("5"), "title": Scalar("Web analytics"), "blank": Scalar("")},
        "Plugins": {"Plugins": ListValue(("A", "B", "A"))},
        "Mail": {"port": Scalar("25"), "host": Scalar("smtp.example.org")},
    }
    assert parse_string(serialize(doc)) == doc
