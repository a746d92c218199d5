"""
Tests for shape detection — classify parsed pages.

Pure unit tests over the sample pages in tests/fixtures/pages.
"""

import pytest

from pageshift.core.errors import UnrecognizedShape
from pageshift.core.models.shape import ContextParam, Shape
from pageshift.core.services.detection import (
    detect_context,
    detect_page,
    detect_shape,
    entry_call_form,
    entry_invocations,
)
from pageshift.core.services.parser import parse_page


# ═══════════════════════════════════════════════════════════════════
#  detect_shape
# ═══════════════════════════════════════════════════════════════════


class TestDetectShape:
    @pytest.mark.parametrize("name,expected", [
        ("static", Shape.MINIMAL),
        ("with_helpers", Shape.MINIMAL),
        ("element", Shape.STATEFUL),
        ("element_shared_request", Shape.STATEFUL),
        ("advanced_shared", Shape.EFFECTFUL),
    ])
    def test_known_shapes(self, page_text, name, expected):
        assert detect_shape(parse_page(page_text(name))) is expected

    def test_sandbox_is_unrecognized(self, page_text):
        with pytest.raises(UnrecognizedShape, match="Page.sandbox"):
            detect_shape(parse_page(page_text("sandbox")))

    def test_missing_entry_point(self):
        page = parse_page("module Pages.A exposing (view)\n\n\nview =\n    1\n")
        with pytest.raises(UnrecognizedShape, match="entry point"):
            detect_shape(page)

    def test_stateful_without_msg(self, page_text):
        text = page_text("element").replace("type Msg\n    = Increment\n", "")
        with pytest.raises(UnrecognizedShape, match="no known shape"):
            detect_shape(parse_page(text))

    def test_effect_wins_over_stateful(self, page_text):
        """An Effect-typed init makes the page effectful even under Page.element."""
        text = page_text("element").replace(
            "init : ( Model, Cmd Msg )", "init : ( Model, Effect Msg )"
        )
        assert detect_shape(parse_page(text)) is Shape.EFFECTFUL

    def test_order_does_not_matter(self, page_text):
        page = parse_page(page_text("element"))
        reordered = page.model_copy(update={"body": list(reversed(page.body))})
        assert detect_shape(reordered) is Shape.STATEFUL


# ═══════════════════════════════════════════════════════════════════
#  Entry point
# ═══════════════════════════════════════════════════════════════════


class TestEntryPoint:
    def test_call_form(self, page_text):
        page = parse_page(page_text("advanced_shared"))
        assert entry_call_form(page.get("page")) == "advanced"

    def test_invocations(self, page_text):
        page = parse_page(page_text("element_shared_request"))
        invocations = entry_invocations(page.get("page"))
        assert [inv.name for inv in invocations] == [
            "init",
            "update",
            "view",
            "subscriptions",
        ]
        assert all(inv.args == ["shared", "req"] for inv in invocations)

    def test_static_invocation(self, page_text):
        page = parse_page(page_text("static"))
        [inv] = entry_invocations(page.get("page"))
        assert inv.name == "view"
        assert inv.function == "view"
        assert inv.args == []


# ═══════════════════════════════════════════════════════════════════
#  Context and full report
# ═══════════════════════════════════════════════════════════════════


class TestDetectContext:
    @pytest.mark.parametrize("name,expected", [
        ("static", []),
        ("element", []),
        ("element_shared_request", [ContextParam.SHARED, ContextParam.REQUEST]),
        ("advanced_shared", [ContextParam.SHARED]),
    ])
    def test_context(self, page_text, name, expected):
        assert detect_context(parse_page(page_text(name))) == expected


class TestDetectPage:
    def test_report(self, page_text):
        result = detect_page(parse_page(page_text("advanced_shared")))
        assert result.shape is Shape.EFFECTFUL
        assert result.history_batches == 0
        assert "subscriptions" in result.declarations

    def test_to_dict(self, page_text):
        data = detect_page(parse_page(page_text("element_shared_request"))).to_dict()
        assert data["shape"] == "stateful"
        assert data["token"] == "element"
        assert data["context_params"] == ["shared", "request"]
        assert data["invocations"]["view"] == ["view", "shared", "req"]
