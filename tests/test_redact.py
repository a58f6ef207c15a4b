from __future__ import annotations

from pyautodarts._redact import truncate_for_log


def test_truncate_for_log_keeps_short_text() -> None:
    assert truncate_for_log('{"throws": []}') == '{"throws": []}'


def test_truncate_for_log_cuts_long_text() -> None:
    text = truncate_for_log("x" * 600)
    assert text.startswith("x" * 200)
    assert not text.startswith("x" * 201)
    assert text.endswith("<truncated>")


def test_truncate_for_log_custom_limit_and_bytes() -> None:
    assert truncate_for_log(b"abcdef", max_chars=3) == "abc…<truncated>"
    assert truncate_for_log(None) == ""
