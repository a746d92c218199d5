"""
Import reconciler — the import list a rewritten page needs.

Required imports come from the target shape; context params add none,
since the entry point already names Shared and Request.
Every other import of the original page is carried over. A required
module the page already imported keeps the union of both exposing
lists. The result is deduplicated by module and sorted by name.
"""

from __future__ import annotations

import logging

from pageshift.core.errors import ImportConflict
from pageshift.core.models.page import Import
from pageshift.core.models.shape import ParameterPolicy, Shape

logger = logging.getLogger(__name__)


def required_imports(policy: ParameterPolicy, params_module: str) -> list[Import]:
    """Imports the synthesized declarations reference.

    Args:
        policy: Resolved policy for the target shape.
        params_module: Route-params module of this page (``Gen.Params.X``).
    """
    # The entry point's signature always names Shared.Model and Request.With.
    required: dict[str, Import] = {
        "Page": Import(module="Page", exposing=["Page"]),
        "Request": Import(module="Request", exposing=["Request"]),
        "Shared": Import(module="Shared"),
        "View": Import(module="View", exposing=["View"]),
        params_module: Import(module=params_module, exposing=["Params"]),
    }
    if policy.shape is Shape.EFFECTFUL:
        required["Effect"] = Import(module="Effect", exposing=["Effect"])
    return list(required.values())


def _merge_exposing(a: list[str] | None, b: list[str] | None) -> list[str] | None:
    if a is None:
        return b
    if b is None:
        return a
    if ".." in a or ".." in b:
        return [".."]
    return a + [item for item in b if item not in a]


def _exposed_name(item: str) -> str:
    """``Msg(..)`` → ``Msg``."""
    return item.split("(", 1)[0].strip()


def reconcile(required: list[Import], original: list[Import]) -> list[Import]:
    """Union required and original imports.

    Raises:
        ImportConflict: The same module under two aliases, two modules
            bound to one name, or a name a required import exposes being
            exposed by another module too.
    """
    merged: dict[str, Import] = {imp.module: imp for imp in required}

    for imp in original:
        current = merged.get(imp.module)
        if current is None:
            merged[imp.module] = imp
            continue
        if current.alias != imp.alias:
            raise ImportConflict(
                f"module {imp.module} is imported as "
                f"'{current.bound_name}' and as '{imp.bound_name}'"
            )
        merged[imp.module] = current.model_copy(
            update={"exposing": _merge_exposing(current.exposing, imp.exposing)}
        )

    bound: dict[str, str] = {}
    for imp in merged.values():
        other = bound.setdefault(imp.bound_name, imp.module)
        if other != imp.module:
            raise ImportConflict(
                f"name '{imp.bound_name}' is bound by both {other} and {imp.module}"
            )

    required_modules = {imp.module for imp in required}
    exposed_by: dict[str, str] = {}
    for module in required_modules:
        for item in merged[module].exposing or []:
            if item != "..":
                exposed_by[_exposed_name(item)] = module
    for imp in merged.values():
        if imp.module in required_modules:
            continue
        for item in imp.exposing or []:
            owner = exposed_by.get(_exposed_name(item))
            if owner is not None:
                raise ImportConflict(
                    f"'{_exposed_name(item)}' is exposed by both {owner} and {imp.module}"
                )

    result = sorted(merged.values(), key=lambda imp: imp.module)
    logger.debug("Reconciled imports: %s", [imp.module for imp in result])
    return result
