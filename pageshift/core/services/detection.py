"""
Detection service — classify a parsed page into a known shape.

A small decision procedure over declaration names, signature arities
and the entry point's constructor call. Order and whitespace never
matter, so pages survive hand edits.

Pure logic — no side effects, no persistence.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field

from pageshift.core.errors import UnrecognizedShape
from pageshift.core.models.page import (
    Declaration,
    PageModule,
    normalize_type,
    split_top_level,
)
from pageshift.core.models.shape import ContextParam, Shape

logger = logging.getLogger(__name__)

ENTRY_POINT = "page"

_CALL_RE = re.compile(r"\bPage\.(\w+)")
_EFFECT_RE = re.compile(r"\bEffect\b")

_CONTEXT_TYPES: dict[str, ContextParam] = {
    normalize_type(p.type_text): p for p in ContextParam
}


@dataclass
class Invocation:
    """One field of the entry point's record: ``name = function args...``."""

    name: str
    function: str
    args: list[str] = field(default_factory=list)


@dataclass
class DetectionResult:
    """What a page currently is."""

    shape: Shape
    context_params: list[ContextParam] = field(default_factory=list)
    invocations: list[Invocation] = field(default_factory=list)
    declarations: list[str] = field(default_factory=list)
    history_batches: int = 0

    def to_dict(self) -> dict:
        return {
            "shape": self.shape.value,
            "token": self.shape.token,
            "context_params": [p.value for p in self.context_params],
            "invocations": {
                inv.name: [inv.function, *inv.args] for inv in self.invocations
            },
            "declarations": self.declarations,
            "history_batches": self.history_batches,
        }


def entry_call_form(decl: Declaration) -> str | None:
    """The ``Page.<form>`` constructor an entry point calls, if any."""
    m = _CALL_RE.search(decl.body)
    return m.group(1) if m else None


def entry_invocations(decl: Declaration) -> list[Invocation]:
    """Parse the record fields the entry point hands to its constructor."""
    body = decl.body
    start = body.find("{")
    end = body.rfind("}")
    if start < 0 or end < start:
        return []

    result: list[Invocation] = []
    for item in split_top_level(body[start + 1:end], ","):
        name, sep, expr = item.partition("=")
        tokens = expr.split()
        if not sep or not tokens:
            continue
        result.append(Invocation(name=name.strip(), function=tokens[0], args=tokens[1:]))
    return result


def _is_effect_typed(decl: Declaration | None) -> bool:
    return bool(decl and decl.signature and _EFFECT_RE.search(decl.signature.result))


def detect_shape(page: PageModule) -> Shape:
    """Return the shape a page currently has.

    Tie-break, first match wins:
        1. effect-typed ``init``/``update``            → Effectful
        2. ``Model`` + ``Msg`` and a multi-field entry  → Stateful
        3. ``view`` with a view-only entry              → Minimal

    Raises:
        UnrecognizedShape: No entry point, an unknown constructor
            (e.g. ``Page.sandbox``), or no rule matches.
    """
    entry = page.get(ENTRY_POINT)
    if entry is None:
        raise UnrecognizedShape(f"{page.name}: no '{ENTRY_POINT}' entry point")

    form = entry_call_form(entry)
    if Shape.from_token(form or "") is None:
        raise UnrecognizedShape(
            f"{page.name}: entry point calls "
            f"{'Page.' + form if form else 'no Page constructor'}; "
            "expected Page.static, Page.element or Page.advanced"
        )

    if _is_effect_typed(page.get("init")) or _is_effect_typed(page.get("update")):
        return Shape.EFFECTFUL

    fields = {inv.name for inv in entry_invocations(entry)}

    if page.get("Model") and page.get("Msg") and len(fields) > 1:
        return Shape.STATEFUL

    if page.get("view") and fields == {"view"}:
        return Shape.MINIMAL

    raise UnrecognizedShape(
        f"{page.name}: declarations {[d.name for d in page.declarations]} "
        f"match no known shape"
    )


def detect_context(page: PageModule) -> list[ContextParam]:
    """Context parameters the current ``view`` already takes.

    Reads the leading parameter types of the view's signature; stops at
    the first parameter that is not a context type.
    """
    view = page.get("view")
    if view is None or view.signature is None:
        return []

    found: list[ContextParam] = []
    for param_type in view.signature.params:
        ctx = _CONTEXT_TYPES.get(normalize_type(param_type))
        if ctx is None or ctx in found:
            break
        found.append(ctx)
    return found


def detect_page(page: PageModule) -> DetectionResult:
    """Full detection report for a parsed page."""
    shape = detect_shape(page)
    entry = page.get(ENTRY_POINT)
    assert entry is not None  # guaranteed once detect_shape succeeds

    result = DetectionResult(
        shape=shape,
        context_params=detect_context(page),
        invocations=entry_invocations(entry),
        declarations=[d.name for d in page.declarations],
        history_batches=page.history.count,
    )
    logger.info(
        "Detected %s as %s (context: %s)",
        page.name,
        shape.token,
        ", ".join(p.value for p in result.context_params) or "none",
    )
    return result
