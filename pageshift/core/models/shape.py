"""
Shape model — the page kinds a generated module can take.

A shape fixes which top-level declarations a page must carry and which
framework constructor its entry point calls. Capability flags decide
which context parameters prefix every per-shape function.
"""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, Field


class Shape(StrEnum):
    """Recognized page shapes."""

    MINIMAL = "minimal"
    STATEFUL = "stateful"
    EFFECTFUL = "effectful"

    @property
    def token(self) -> str:
        """Framework token (``Page.<token>``, also the CLI target name)."""
        return _TOKENS[self]

    @property
    def required(self) -> tuple[str, ...]:
        """Declaration names the shape requires, in emission order."""
        if self is Shape.MINIMAL:
            return ("page", "view")
        return ("page", "Model", "Msg", "init", "update", "view", "subscriptions")

    @property
    def exposing(self) -> list[str]:
        """Identifiers the module header exposes for this shape."""
        if self is Shape.MINIMAL:
            return ["page"]
        return ["page", "Model", "Msg"]

    @classmethod
    def from_token(cls, token: str) -> Shape | None:
        """Look up a shape by framework token (static, element, advanced)."""
        for shape, tok in _TOKENS.items():
            if tok == token.lower():
                return shape
        return None


_TOKENS: dict[Shape, str] = {
    Shape.MINIMAL: "static",
    Shape.STATEFUL: "element",
    Shape.EFFECTFUL: "advanced",
}

SHAPE_TOKENS: tuple[str, ...] = tuple(_TOKENS.values())

# Names generated for any shape; anything else in a page is a helper.
RESERVED_NAMES: frozenset[str] = frozenset(Shape.STATEFUL.required)


class Capability(StrEnum):
    """Optional access a page's functions can be given."""

    SHARED = "shared"
    REQUEST = "request"


class ContextParam(StrEnum):
    """A leading parameter threaded through every page function."""

    SHARED = "shared"
    REQUEST = "request"

    @property
    def type_text(self) -> str:
        return "Shared.Model" if self is ContextParam.SHARED else "Request.With Params"

    @property
    def arg(self) -> str:
        return "shared" if self is ContextParam.SHARED else "req"


class ParameterPolicy(BaseModel):
    """Context parameters every generated function of a shape must carry.

    ``entry_params`` are the entry point's own parameters, fixed by the
    framework's calling convention; ``forwarded_args`` is the subset the
    entry point passes on to each record field.
    """

    shape: Shape
    context_params: list[ContextParam] = Field(default_factory=list)
    entry_params: list[str] = Field(default_factory=lambda: ["shared", "req"])
    ignored: list[Capability] = Field(default_factory=list)

    @property
    def prefix_types(self) -> list[str]:
        return [p.type_text for p in self.context_params]

    @property
    def forwarded_args(self) -> list[str]:
        return [p.arg for p in self.context_params]
