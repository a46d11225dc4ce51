"""Tests for clean_text — normalization before forwarding to the sheet endpoint."""

from query_store.core.clean_text import clean_text

ZWSP = "​"
BOM = "﻿"
NBSP = " "


def test_strips_outer_whitespace():
    assert clean_text("  hello  ") == "hello"


def test_collapses_spaces_and_tabs():
    assert clean_text("a   b\t\tc") == "a b c"


def test_removes_zero_width_and_bom():
    assert clean_text(f"{BOM}hel{ZWSP}lo") == "hello"


def test_removes_control_characters():
    assert clean_text("a\x00b\x07c") == "abc"


def test_normalizes_crlf_and_trailing_spaces():
    assert clean_text("line one   \r\nline two\r") == "line one\nline two"


def test_collapses_runs_of_blank_lines():
    assert clean_text("a\n\n\n\n\nb") == "a\n\nb"


def test_keeps_single_blank_line():
    assert clean_text("a\n\nb") == "a\n\nb"


def test_nfkc_folds_compatibility_forms():
    # full-width letters, non-breaking space
    assert clean_text(f"ＡＢＣ{NBSP}def") == "ABC def"


def test_whitespace_only_becomes_empty():
    assert clean_text(f" \n\t {ZWSP} ") == ""


def test_is_idempotent():
    messy = f"  {BOM}Some   text\r\n\r\n\r\n\twith{ZWSP}  junk  \n"
    once = clean_text(messy)
    assert clean_text(once) == once
    assert once == "Some text\n\n\twith junk"


def test_keeps_leading_indentation():
    assert clean_text("def f():\n    return  1   \n") == "def f():\n    return 1"


def test_indentation_only_line_becomes_blank():
    assert clean_text("a\n    \nb") == "a\n\nb"
