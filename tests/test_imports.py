"""
Tests for the import reconciler.
"""

import pytest

from pageshift.core.errors import ImportConflict
from pageshift.core.models.page import Import
from pageshift.core.models.shape import Capability, Shape
from pageshift.core.services.imports import reconcile, required_imports
from pageshift.core.services.policy import resolve

_PARAMS = "Gen.Params.Home_"


def _required(shape: Shape, *flags: Capability) -> list[Import]:
    return required_imports(resolve(shape, flags), _PARAMS)


class TestRequiredImports:
    def test_minimal(self):
        modules = [imp.module for imp in _required(Shape.MINIMAL)]
        assert sorted(modules) == [_PARAMS, "Page", "Request", "Shared", "View"]

    def test_effectful_adds_effect(self):
        by_module = {imp.module: imp for imp in _required(Shape.EFFECTFUL, Capability.SHARED)}
        assert by_module["Effect"].exposing == ["Effect"]

    def test_stateful_has_no_effect(self):
        modules = {imp.module for imp in _required(Shape.STATEFUL, Capability.SHARED)}
        assert "Effect" not in modules

    def test_params_module_exposes_params(self):
        by_module = {imp.module: imp for imp in _required(Shape.STATEFUL)}
        assert by_module[_PARAMS].exposing == ["Params"]

    def test_context_flags_add_nothing(self):
        plain = _required(Shape.STATEFUL)
        assert _required(Shape.STATEFUL, Capability.SHARED, Capability.REQUEST) == plain


class TestReconcile:
    def test_sorted_and_deduplicated(self):
        required = _required(Shape.MINIMAL)
        result = reconcile(required, list(reversed(required)))
        assert [imp.module for imp in result] == [
            _PARAMS,
            "Page",
            "Request",
            "Shared",
            "View",
        ]

    def test_user_imports_carried_over(self):
        result = reconcile(
            _required(Shape.MINIMAL),
            [Import(module="Html", exposing=["Html", "text"])],
        )
        html = next(imp for imp in result if imp.module == "Html")
        assert html.exposing == ["Html", "text"]

    def test_exposing_lists_merged(self):
        result = reconcile(
            _required(Shape.MINIMAL),
            [Import(module="View", exposing=["View", "placeholder"])],
        )
        view = next(imp for imp in result if imp.module == "View")
        assert view.exposing == ["View", "placeholder"]

    def test_expose_all_absorbs(self):
        result = reconcile(
            _required(Shape.MINIMAL),
            [Import(module="Page", exposing=[".."])],
        )
        page = next(imp for imp in result if imp.module == "Page")
        assert page.exposing == [".."]

    def test_stale_effect_import_kept(self):
        result = reconcile(
            _required(Shape.STATEFUL),
            [Import(module="Effect", exposing=["Effect"])],
        )
        assert "Effect" in [imp.module for imp in result]


class TestConflicts:
    def test_same_module_two_aliases(self):
        with pytest.raises(ImportConflict, match="Shared"):
            reconcile(_required(Shape.MINIMAL), [Import(module="Shared", alias="S")])

    def test_two_modules_one_name(self):
        with pytest.raises(ImportConflict, match="bound by both"):
            reconcile(_required(Shape.MINIMAL), [Import(module="My.View", alias="View")])

    def test_exposed_name_clash(self):
        with pytest.raises(ImportConflict, match="'View' is exposed by both View and Html"):
            reconcile(
                _required(Shape.MINIMAL),
                [Import(module="Html", exposing=["Html", "View"])],
            )

    def test_constructor_exposure_clash(self):
        with pytest.raises(ImportConflict, match="'Page'"):
            reconcile(
                _required(Shape.MINIMAL),
                [Import(module="Layout", exposing=["Page(..)"])],
            )
