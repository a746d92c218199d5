"""
Page transform — the whole rewrite, text in, text out.

    parse → detect → resolve policy → synthesize + archive
          → reconcile imports → assemble

Pure logic — no file access. Raises on the first fatal condition, so a
failed transform never yields partial output.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field

from pageshift.core.models.page import Declaration, History, TextBlock
from pageshift.core.models.settings import Settings
from pageshift.core.models.shape import (
    RESERVED_NAMES,
    Capability,
    ParameterPolicy,
    Shape,
)
from pageshift.core.services.assembler import assemble, render_header
from pageshift.core.services.detection import detect_context, detect_shape
from pageshift.core.services.generators.page import plan_declarations, synthesize
from pageshift.core.services.history import archive
from pageshift.core.services.imports import reconcile, required_imports
from pageshift.core.services.parser import parse_page
from pageshift.core.services.policy import resolve

logger = logging.getLogger(__name__)


@dataclass
class Transformation:
    """Everything a successful transform produced."""

    module_name: str
    source_shape: Shape
    target_shape: Shape
    policy: ParameterPolicy
    text: str
    active: list[str] = field(default_factory=list)
    kept: list[str] = field(default_factory=list)
    superseded: list[str] = field(default_factory=list)
    history: History = field(default_factory=History)


def _transition_label(source: Shape, policy: ParameterPolicy) -> str:
    label = f"{source.token} -> {policy.shape.token}"
    if policy.context_params:
        label += f" ({', '.join(policy.forwarded_args)})"
    return label


def transform_page(
    text: str,
    target: Shape,
    flags: Iterable[Capability] = (),
    settings: Settings | None = None,
) -> Transformation:
    """Rewrite page *text* into the *target* shape.

    Args:
        text: Current page source.
        target: Shape to upgrade (or downgrade) to.
        flags: Enabled capabilities; ones the target cannot use are ignored.
        settings: Placeholder and module-prefix settings.

    Raises:
        UnrecognizedShape: The page matches no known shape.
        ImportConflict: Required and existing imports collide.
    """
    settings = settings or Settings()

    page = parse_page(text)
    source = detect_shape(page)
    policy = resolve(target, flags)

    synthesized = synthesize(policy, placeholder=settings.placeholder)
    current = ParameterPolicy(shape=source, context_params=detect_context(page))
    plan = plan_declarations(page, synthesized, current)
    history = archive(plan.superseded, page.history, _transition_label(source, policy))

    imports = reconcile(
        required_imports(policy, settings.params_module(page.name)),
        page.imports,
    )

    preserved: list[Declaration | TextBlock] = [
        item
        for item in page.body
        if not (isinstance(item, Declaration) and item.name in RESERVED_NAMES)
    ]

    output = assemble(
        render_header(page.name, target, port=page.header.port),
        imports,
        plan.active,
        preserved,
        history,
        doc=page.doc,
    )

    logger.info(
        "Transformed %s: %s -> %s, %d superseded",
        page.name,
        source.token,
        target.token,
        len(plan.superseded),
    )
    return Transformation(
        module_name=page.name,
        source_shape=source,
        target_shape=target,
        policy=policy,
        text=output,
        active=[d.name for d in plan.active],
        kept=plan.kept,
        superseded=[d.name for d in plan.superseded],
        history=history,
    )
