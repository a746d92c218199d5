"""
Parameter policy resolver — which context parameters a shape's functions take.

    resolve(Shape.STATEFUL, {Capability.SHARED, Capability.REQUEST})
        → context_params = [SHARED, REQUEST]

Flags a shape cannot use are dropped, never rejected: a minimal page
takes no context at all, and an effectful page only ever takes the
shared model (the entry point still receives ``req``, unused).
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from pageshift.core.models.shape import Capability, ContextParam, ParameterPolicy, Shape

logger = logging.getLogger(__name__)

# Fixed emission order; a capability maps to the parameter it enables.
_ORDER: tuple[tuple[Capability, ContextParam], ...] = (
    (Capability.SHARED, ContextParam.SHARED),
    (Capability.REQUEST, ContextParam.REQUEST),
)

_ALLOWED: dict[Shape, frozenset[Capability]] = {
    Shape.MINIMAL: frozenset(),
    Shape.STATEFUL: frozenset({Capability.SHARED, Capability.REQUEST}),
    Shape.EFFECTFUL: frozenset({Capability.SHARED}),
}


def resolve(target: Shape, flags: Iterable[Capability]) -> ParameterPolicy:
    """Compute the parameter policy for *target* under *flags*."""
    enabled = set(flags)
    allowed = _ALLOWED[target]

    context = [param for cap, param in _ORDER if cap in enabled and cap in allowed]
    ignored = [cap for cap, _ in _ORDER if cap in enabled and cap not in allowed]

    if ignored:
        logger.info(
            "Ignoring %s for %s pages",
            ", ".join(c.value for c in ignored),
            target.token,
        )

    return ParameterPolicy(shape=target, context_params=context, ignored=ignored)
