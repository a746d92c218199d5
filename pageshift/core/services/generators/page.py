"""
Page declaration generator — synthesize the declarations of a page shape.

One builder of function templates per shape, one renderer parameterized
by the ParameterPolicy. Every function gets the policy's context prefix
in its signature, in its definition head, and at its call site in the
entry point's record, so the three always agree.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from pageshift.core.models.page import Declaration, PageModule, Signature
from pageshift.core.models.shape import RESERVED_NAMES, ParameterPolicy, Shape

logger = logging.getLogger(__name__)

ENTRY_POINT = "page"
INDENT = "    "


@dataclass(frozen=True)
class _FunctionTemplate:
    """A per-shape function before the context prefix is applied.

    ``params`` are the function's own ``(type, arg)`` pairs; ``body`` is
    the definition text, indented one level when rendered.
    """

    name: str
    params: tuple[tuple[str, str], ...]
    result: str
    body: str


# ── Shape tables ────────────────────────────────────────────────


def _stateful_functions(wrapper: str, placeholder: str) -> tuple[_FunctionTemplate, ...]:
    """init/update/view/subscriptions with a Cmd- or Effect-style result."""
    return (
        _FunctionTemplate(
            name="init",
            params=(),
            result=f"( Model, {wrapper} Msg )",
            body=f"( {{}}, {wrapper}.none )",
        ),
        _FunctionTemplate(
            name="update",
            params=(("Msg", "msg"), ("Model", "model")),
            result=f"( Model, {wrapper} Msg )",
            body=f"case msg of\n    _ ->\n        ( model, {wrapper}.none )",
        ),
        _FunctionTemplate(
            name="view",
            params=(("Model", "model"),),
            result="View Msg",
            body=f'View.placeholder "{placeholder}"',
        ),
        _FunctionTemplate(
            name="subscriptions",
            params=(("Model", "model"),),
            result="Sub Msg",
            body="Sub.none",
        ),
    )


def _minimal_functions(placeholder: str) -> tuple[_FunctionTemplate, ...]:
    """A single context-free view."""
    return (
        _FunctionTemplate(
            name="view",
            params=(),
            result="View msg",
            body=f'View.placeholder "{placeholder}"',
        ),
    )


def _functions(shape: Shape, placeholder: str) -> tuple[_FunctionTemplate, ...]:
    """Per-shape functions, in the framework's record order."""
    if shape is Shape.MINIMAL:
        return _minimal_functions(placeholder)
    return _stateful_functions("Effect" if shape is Shape.EFFECTFUL else "Cmd", placeholder)


_MODEL = Declaration(name="Model", kind="type", lines=["type alias Model =", f"{INDENT}{{}}"])
_MSG = Declaration(name="Msg", kind="type", lines=["type Msg", f"{INDENT}= ReplaceMe"])

_ENTRY_TYPE = ["Shared.Model", "Request.With Params"]


def _page_type(shape: Shape) -> str:
    return "Page" if shape is Shape.MINIMAL else "Page.With Model Msg"


# ── Renderers ───────────────────────────────────────────────────


def _render_function(tmpl: _FunctionTemplate, policy: ParameterPolicy) -> Declaration:
    signature = Signature(
        params=[*policy.prefix_types, *(t for t, _ in tmpl.params)],
        result=tmpl.result,
    )
    head = " ".join([tmpl.name, *policy.forwarded_args, *(a for _, a in tmpl.params), "="])
    return Declaration(
        name=tmpl.name,
        signature=signature,
        signature_lines=1,
        lines=[
            f"{tmpl.name} : {signature.render()}",
            head,
            *(INDENT + line for line in tmpl.body.splitlines()),
        ],
    )


def _render_entry(policy: ParameterPolicy, functions: tuple[_FunctionTemplate, ...]) -> Declaration:
    shape = policy.shape
    signature = Signature(params=list(_ENTRY_TYPE), result=_page_type(shape))
    fields = [" ".join([t.name, "=", t.name, *policy.forwarded_args]) for t in functions]
    record = [f"{INDENT * 2}{{ {fields[0]}"]
    record += [f"{INDENT * 2}, {f}" for f in fields[1:]]
    record.append(f"{INDENT * 2}}}")
    return Declaration(
        name=ENTRY_POINT,
        signature=signature,
        signature_lines=1,
        lines=[
            f"{ENTRY_POINT} : {signature.render()}",
            " ".join([ENTRY_POINT, *policy.entry_params, "="]),
            f"{INDENT}Page.{shape.token}",
            *record,
        ],
    )


# ── Public API ──────────────────────────────────────────────────


def synthesize(policy: ParameterPolicy, *, placeholder: str = "Hello World") -> list[Declaration]:
    """Build every declaration the policy's shape requires, in emission order.

    Args:
        policy: Resolved parameter policy; its ``shape`` is the target.
        placeholder: Text shown by the generated view.

    Returns:
        Declarations ordered as ``Shape.required``.
    """
    shape = policy.shape
    functions = _functions(shape, placeholder)
    by_name: dict[str, Declaration] = {ENTRY_POINT: _render_entry(policy, functions)}
    if shape is not Shape.MINIMAL:
        by_name["Model"] = _MODEL
        by_name["Msg"] = _MSG
    for tmpl in functions:
        by_name[tmpl.name] = _render_function(tmpl, policy)

    return [by_name[name] for name in shape.required]


@dataclass
class DeclarationPlan:
    """How a page's existing declarations meet the synthesized ones.

    Attributes:
        active:     Declarations to emit, in the shape's order.
        superseded: Existing declarations being replaced, in source order.
        kept:       Names whose existing declaration stays active as-is.
    """

    active: list[Declaration] = field(default_factory=list)
    superseded: list[Declaration] = field(default_factory=list)
    kept: list[str] = field(default_factory=list)


def entry_point(policy: ParameterPolicy) -> Declaration:
    """The entry point as generated for *policy*, before any hand edits."""
    return _render_entry(policy, _functions(policy.shape, ""))


def _same_text(a: Declaration, b: Declaration) -> bool:
    return a.text.split() == b.text.split()


def _still_current(old: Declaration, new: Declaration) -> bool:
    """Whether an existing declaration already satisfies the synthesized one."""
    if old.kind == "type" and new.kind == "type":
        return True
    if old.signature is None or new.signature is None:
        return False
    return old.signature.key() == new.signature.key()


def plan_declarations(
    page: PageModule,
    synthesized: list[Declaration],
    current: ParameterPolicy | None = None,
) -> DeclarationPlan:
    """Decide, per required name, whether to keep, replace or add.

    - the entry point is always regenerated; the old one is superseded
      only when it carries hand edits, i.e. its text (whitespace aside)
      matches neither the new entry point nor the one generated for the
      page's *current* shape and context;
    - an existing ``Model``/``Msg`` type is kept;
    - an existing function whose signature already matches is kept;
    - any other existing reserved declaration is superseded.

    Helpers (names outside the reserved set) are not touched.
    """
    plan = DeclarationPlan()
    kept_ids: set[int] = set()
    generated = [entry_point(current)] if current is not None else []

    for new in synthesized:
        old = page.get(new.name)
        if new.name == ENTRY_POINT:
            generated.append(new)
            plan.active.append(new)
        elif old is not None and _still_current(old, new):
            plan.active.append(old)
            plan.kept.append(new.name)
            kept_ids.add(id(old))
        else:
            plan.active.append(new)

    for decl in page.declarations:
        if decl.name == ENTRY_POINT:
            if not any(_same_text(decl, g) for g in generated):
                plan.superseded.append(decl)
        elif decl.name in RESERVED_NAMES and id(decl) not in kept_ids:
            plan.superseded.append(decl)

    logger.debug(
        "Plan: kept=%s superseded=%s",
        plan.kept,
        [d.name for d in plan.superseded],
    )
    return plan
