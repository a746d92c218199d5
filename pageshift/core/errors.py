"""
Error taxonomy for a page upgrade run.

Every error here is fatal for the run: it is reported to the caller and
the target file is left untouched.
"""

from __future__ import annotations


class PageShiftError(Exception):
    """Base class for run-aborting transformation errors."""

    kind = "error"


class UnrecognizedShape(PageShiftError):
    """The input does not match any known page shape."""

    kind = "unrecognized_shape"


class ImportConflict(PageShiftError):
    """Two imports bind the same name from different sources."""

    kind = "import_conflict"
