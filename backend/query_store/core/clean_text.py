"""Text Cleaning — normalizes pasted text before it is forwarded to the sheet endpoint.

Invariants:
    - Output is NFKC-normalized
    - Newlines and tabs survive as whitespace; other control/format chars are dropped
    - Never more than one blank line in a row, no trailing spaces on any line
    - Leading indentation of a line is kept as-is; interior runs collapse to one space
    - clean_text(clean_text(x)) == clean_text(x)
"""

import re
import unicodedata

_HORIZONTAL_WS = re.compile(r"[ \t]+")
_INDENT = re.compile(r"[ \t]*")
_EXTRA_BLANK_LINES = re.compile(r"\n{3,}")


def _keep_char(ch: str) -> bool:
    if ch in ("\n", "\t"):
        return True
    # Cc = control, Cf = format (zero-width space, BOM, bidi marks)
    return unicodedata.category(ch) not in ("Cc", "Cf")


def _clean_line(line: str) -> str:
    indent = _INDENT.match(line).group()
    body = _HORIZONTAL_WS.sub(" ", line[len(indent):]).rstrip()
    return indent + body if body else ""


def clean_text(original: str) -> str:
    text = unicodedata.normalize("NFKC", original)
    text = text.replace("\r\n", "\n").replace("\r", "\n")
    text = "".join(ch for ch in text if _keep_char(ch))
    lines = [_clean_line(line) for line in text.split("\n")]
    text = "\n".join(lines)
    text = _EXTRA_BLANK_LINES.sub("\n\n", text)
    return text.strip()
