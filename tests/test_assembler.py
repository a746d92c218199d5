"""
Tests for the module assembler.
"""

from pageshift.core.models import (
    Declaration,
    History,
    HistoryBatch,
    Import,
    Shape,
    TextBlock,
)
from pageshift.core.services.assembler import assemble, render_header


def _decl(name: str, *lines: str) -> Declaration:
    return Declaration(name=name, lines=list(lines))


class TestRenderHeader:
    def test_minimal_exposes_page(self):
        assert render_header("Pages.A", Shape.MINIMAL).render() == (
            "module Pages.A exposing (page)"
        )

    def test_stateful_exposes_model_and_msg(self):
        header = render_header("Pages.A", Shape.EFFECTFUL, port=True)
        assert header.render() == "port module Pages.A exposing (page, Model, Msg)"


class TestAssemble:
    def test_layout(self):
        text = assemble(
            render_header("Pages.A", Shape.MINIMAL),
            [Import(module="Shared"), Import(module="View", exposing=["View"])],
            [_decl("page", "page =", "    1"), _decl("view", "view =", "    2")],
            [TextBlock(lines=["-- Helpers"]), _decl("helper", "helper =", "    3")],
            History(batches=[HistoryBatch(lines=["-- ARCHIVED [1] x", "-- old =", "--     0"])]),
        )
        assert text == (
            "module Pages.A exposing (page)\n"
            "\n"
            "import Shared\n"
            "import View exposing (View)\n"
            "\n\n"
            "page =\n    1\n"
            "\n\n"
            "view =\n    2\n"
            "\n\n"
            "-- Helpers\n"
            "\n\n"
            "helper =\n    3\n"
            "\n\n"
            "-- ARCHIVED [1] x\n-- old =\n--     0\n"
        )

    def test_no_history_no_trailing_chunk(self):
        text = assemble(
            render_header("Pages.A", Shape.MINIMAL),
            [],
            [_decl("page", "page =", "    1")],
            [],
            History(),
        )
        assert text == "module Pages.A exposing (page)\n\n\npage =\n    1\n"

    def test_ends_with_single_newline(self):
        text = assemble(
            render_header("Pages.A", Shape.MINIMAL),
            [],
            [_decl("page", "page =", "    1", "")],
            [],
            History(),
        )
        assert text.endswith("    1\n")
        assert not text.endswith("\n\n")

    def test_doc_between_header_and_imports(self):
        text = assemble(
            render_header("Pages.A", Shape.MINIMAL),
            [Import(module="Shared")],
            [_decl("page", "page =", "    1")],
            [],
            History(),
            doc=TextBlock(lines=["{-| About A.", "-}"]),
        )
        assert text == (
            "module Pages.A exposing (page)\n"
            "\n"
            "{-| About A.\n"
            "-}\n"
            "\n"
            "import Shared\n"
            "\n\n"
            "page =\n    1\n"
        )
