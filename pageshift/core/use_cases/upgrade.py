"""
Upgrade use case — rewrite one page file into a target shape.

Ties together config loading, the page transform, and atomic
persistence. Never raises for expected failures: they land in
``UpgradeResult.error`` and the file on disk is left as it was.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field
from pathlib import Path

from pageshift.core.config.loader import ConfigError, load_settings
from pageshift.core.errors import PageShiftError
from pageshift.core.models.shape import Capability, Shape
from pageshift.core.persistence.page_file import read_page, write_page
from pageshift.core.services.transform import transform_page

logger = logging.getLogger(__name__)


@dataclass
class UpgradeResult:
    """Result of the upgrade use case."""

    path: Path
    target_shape: Shape
    module_name: str = ""
    source_shape: Shape | None = None
    context_params: list[str] = field(default_factory=list)
    ignored_flags: list[str] = field(default_factory=list)
    text: str = ""
    kept: list[str] = field(default_factory=list)
    superseded: list[str] = field(default_factory=list)
    history_batches: int = 0
    written: bool = False
    dry_run: bool = False
    error: str | None = None
    error_kind: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def to_dict(self) -> dict:
        result: dict = {"path": str(self.path), "target": self.target_shape.token}
        if self.error:
            result["error"] = self.error
            result["error_kind"] = self.error_kind
            return result

        result.update(
            module=self.module_name,
            source=self.source_shape.token if self.source_shape else None,
            context_params=self.context_params,
            ignored_flags=self.ignored_flags,
            kept=self.kept,
            superseded=self.superseded,
            history_batches=self.history_batches,
            written=self.written,
            dry_run=self.dry_run,
        )
        if self.dry_run:
            result["text"] = self.text
        return result


def _enabled_flags(flags: Iterable[Capability], shared: bool, request: bool) -> list[Capability]:
    enabled = set(flags)
    if shared:
        enabled.add(Capability.SHARED)
    if request:
        enabled.add(Capability.REQUEST)
    return sorted(enabled)


def run_upgrade(
    path: Path,
    target: Shape,
    flags: Iterable[Capability] = (),
    dry_run: bool = False,
    config_path: Path | None = None,
) -> UpgradeResult:
    """Upgrade the page at *path* to *target*.

    Args:
        path: Page source file.
        target: Shape to rewrite the page into.
        flags: Capabilities requested on the command line; OR-ed with
            the ``shared``/``request`` defaults from pageshift.yml.
        dry_run: Compute the new text but leave the file alone.
        config_path: Explicit pageshift.yml (default: search upward
            from the page's directory).

    Returns:
        UpgradeResult; check ``ok`` / ``error``.
    """
    result = UpgradeResult(path=path, target_shape=target, dry_run=dry_run)

    try:
        settings = load_settings(config_path, start_dir=path.parent)
        text = read_page(path)
        transformation = transform_page(
            text,
            target,
            _enabled_flags(flags, settings.shared, settings.request),
            settings,
        )
        if not dry_run:
            write_page(path, transformation.text)
            result.written = True
    except (PageShiftError, ConfigError) as e:
        result.error = str(e)
        result.error_kind = e.kind
        logger.info("Upgrade of %s failed: %s", path, e)
        return result
    except OSError as e:
        result.error = f"{path}: {e.strerror or e}"
        result.error_kind = "io"
        logger.info("Upgrade of %s failed: %s", path, e)
        return result
    except UnicodeDecodeError as e:
        result.error = f"{path}: not valid UTF-8 (byte {e.start})"
        result.error_kind = "encoding"
        logger.info("Upgrade of %s failed: %s", path, e)
        return result

    policy = transformation.policy
    result.module_name = transformation.module_name
    result.source_shape = transformation.source_shape
    result.context_params = [p.value for p in policy.context_params]
    result.ignored_flags = [c.value for c in policy.ignored]
    result.text = transformation.text
    result.kept = transformation.kept
    result.superseded = transformation.superseded
    result.history_batches = transformation.history.count
    return result
