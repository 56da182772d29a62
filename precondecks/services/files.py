"""
Filesystem helpers shared by the page cache and the decklist writer.
"""

import os
import tempfile
from pathlib import Path

# Characters rejected in file names on at least one supported platform.
# Stripped everywhere so cache and output names match across hosts.
INVALID_FILENAME_CHARS = frozenset('<>:"/\\|?*' + "".join(chr(i) for i in range(32)))


def sanitize_filename(name: str) -> str:
    """
    Remove characters that are invalid in a file name.

    Distinct inputs may collapse to the same name
    ("a:b" and "ab" both give "ab"); callers treat them as the same file.
    """
    return "".join(ch for ch in name if ch not in INVALID_FILENAME_CHARS)


def write_text_atomic(path: Path, text: str) -> None:
    """
    Write text so that the file is either complete or absent.

    The content goes to a temporary sibling first and is then renamed into
    place.
    """
    fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=".", suffix=".part")
    try:
        with os.fdopen(fd, "w", encoding="utf-8", newline="") as f:
            f.write(text)
        os.replace(tmp_name, path)
    except BaseException:
        Path(tmp_name).unlink(missing_ok=True)
        raise
