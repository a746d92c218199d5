"""
Page file persistence — read a page, write it back atomically.

Writes go to a temp file in the same directory and are then renamed
over the target, so a page is either fully rewritten or left as it was.
"""

from __future__ import annotations

import logging
import shutil
import tempfile
from pathlib import Path

logger = logging.getLogger(__name__)


def read_page(path: Path) -> str:
    """Read page source as UTF-8 text.

    Raises:
        OSError: The file cannot be read.
        UnicodeDecodeError: The file is not valid UTF-8.
    """
    text = path.read_text(encoding="utf-8")
    logger.debug("Read %d bytes from %s", len(text), path)
    return text


def write_page(path: Path, text: str) -> None:
    """Replace the page at *path* with *text* (atomic write).

    Raises:
        OSError: If the temp file cannot be written or renamed. The
            original file is untouched in that case.
    """
    fd, tmp_path = tempfile.mkstemp(
        dir=path.parent,
        prefix=f".{path.name}_",
        suffix=".tmp",
    )
    tmp = Path(tmp_path)
    try:
        with open(fd, "w", encoding="utf-8", newline="\n") as fh:
            fh.write(text)
        if path.exists():
            shutil.copymode(path, tmp)  # mkstemp creates 0600
        tmp.replace(path)
        logger.debug("Page written to %s", path)
    except Exception:
        tmp.unlink(missing_ok=True)
        logger.error("Failed to write %s", path)
        raise
