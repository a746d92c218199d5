"""
History archiver — keep superseded declarations as commented-out text.

Each run that replaces declarations appends exactly one batch to the end
of the page. A batch opens with a marker line and holds every superseded
declaration verbatim, one comment prefix per line:

    -- ARCHIVED [2] element -> advanced (shared)
    -- init : ( Model, Cmd Msg )
    -- init =
    --     ( {}, Cmd.none )

Existing batches are never edited, reordered, or dropped.
"""

from __future__ import annotations

import logging
import re

from pageshift.core.models.page import Declaration, History, HistoryBatch

logger = logging.getLogger(__name__)

ARCHIVE_MARKER = "-- ARCHIVED"

_ARCHIVED_NAME_RE = re.compile(
    r"^-- (?:type\s+(?:alias\s+)?([A-Z]\w*)"
    r"|([a-z_][\w']*)\s*:(?!:)"
    r"|([a-z_][\w']*)[^=]*=(?!=))"
)


def comment_out(decl: Declaration) -> list[str]:
    """Render a declaration as disabled comment lines."""
    return [f"-- {line}" if line.strip() else "--" for line in decl.lines]


def archive(
    superseded: list[Declaration],
    previous: History,
    label: str,
) -> History:
    """Append one batch holding *superseded* after *previous*.

    Args:
        superseded: Declarations being replaced, in source order.
        previous: History read from the page.
        label: Short description of the transition, shown on the marker.

    Returns:
        The grown history, or *previous* itself when nothing was superseded.
    """
    if not superseded:
        return previous

    number = previous.count + 1
    lines = [f"{ARCHIVE_MARKER} [{number}] {label}"]
    for idx, decl in enumerate(superseded):
        archived = decl.model_copy(update={"archived": True})
        if idx:
            lines.append("--")
        lines.extend(comment_out(archived))

    logger.info(
        "Archived %d declaration(s) as batch %d: %s",
        len(superseded),
        number,
        ", ".join(d.name for d in superseded),
    )
    return previous.append(HistoryBatch(lines=lines))


def archived_names(batch: HistoryBatch) -> list[str]:
    """Names of the declarations stored in a batch, in order."""
    names: list[str] = []
    for line in batch.lines[1:]:
        m = _ARCHIVED_NAME_RE.match(line)
        if not m:
            continue
        name = m.group(1) or m.group(2) or m.group(3)
        if name not in names:
            names.append(name)
    return names
