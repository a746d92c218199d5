"""
Detect use case — report what a page file currently is.

Read-only: parses and classifies the page, never writes.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from pageshift.core.errors import PageShiftError
from pageshift.core.persistence.page_file import read_page
from pageshift.core.services.detection import DetectionResult, detect_page
from pageshift.core.services.parser import parse_page

logger = logging.getLogger(__name__)


@dataclass
class InspectResult:
    """Result of the detect use case."""

    path: Path
    module_name: str = ""
    detection: DetectionResult | None = None
    error: str | None = None
    error_kind: str | None = None

    def to_dict(self) -> dict:
        result: dict = {"path": str(self.path)}
        if self.error:
            result["error"] = self.error
            result["error_kind"] = self.error_kind
            return result

        result["module"] = self.module_name
        if self.detection:
            result["detection"] = self.detection.to_dict()
        return result


def inspect_page(path: Path) -> InspectResult:
    """Parse and classify the page at *path*."""
    result = InspectResult(path=path)

    try:
        page = parse_page(read_page(path))
        result.module_name = page.name
        result.detection = detect_page(page)
    except PageShiftError as e:
        result.error = str(e)
        result.error_kind = e.kind
    except OSError as e:
        result.error = f"{path}: {e.strerror or e}"
        result.error_kind = "io"
    except UnicodeDecodeError as e:
        result.error = f"{path}: not valid UTF-8 (byte {e.start})"
        result.error_kind = "encoding"

    return result
