"""
Tests for the history archiver.
"""

from pageshift.core.models.page import Declaration, History, HistoryBatch, Signature
from pageshift.core.services.history import (
    ARCHIVE_MARKER,
    archive,
    archived_names,
    comment_out,
)


def _decl(name: str, *lines: str) -> Declaration:
    return Declaration(
        name=name,
        signature=Signature.parse(lines[0].split(":", 1)[1]),
        signature_lines=1,
        lines=list(lines),
    )


_VIEW = _decl("view", "view : View msg", "view =", '    View.placeholder "A"')
_INIT = _decl("init", "init : ( Model, Cmd Msg )", "init =", "", "    ( {}, Cmd.none )")


class TestCommentOut:
    def test_prefixes_every_line(self):
        assert comment_out(_VIEW) == [
            "-- view : View msg",
            "-- view =",
            '--     View.placeholder "A"',
        ]

    def test_blank_lines_become_bare_markers(self):
        assert comment_out(_INIT)[2] == "--"


class TestArchive:
    def test_nothing_superseded_keeps_history(self):
        previous = History()
        assert archive([], previous, "static -> static") is previous

    def test_first_batch(self):
        history = archive([_VIEW], History(), "static -> element")
        assert history.count == 1
        batch = history.batches[0]
        assert batch.marker == f"{ARCHIVE_MARKER} [1] static -> element"
        assert batch.lines[1:] == comment_out(_VIEW)

    def test_declarations_separated(self):
        history = archive([_INIT, _VIEW], History(), "element -> static")
        lines = history.batches[0].lines
        separator = 1 + len(_INIT.lines)
        assert lines[separator] == "--"
        assert lines[separator + 1] == "-- view : View msg"

    def test_appends_after_existing(self):
        first = archive([_VIEW], History(), "static -> element")
        second = archive([_INIT], first, "element -> advanced (shared)")
        assert second.count == 2
        assert second.batches[0] == first.batches[0]
        assert second.batches[1].marker.startswith(f"{ARCHIVE_MARKER} [2]")
        assert first.count == 1  # previous history is not mutated

    def test_text_layout(self):
        history = History(batches=[
            HistoryBatch(lines=["-- ARCHIVED [1] a", "-- x"]),
            HistoryBatch(lines=["-- ARCHIVED [2] b", "-- y"]),
        ])
        assert history.text == "-- ARCHIVED [1] a\n-- x\n\n\n-- ARCHIVED [2] b\n-- y"


class TestArchivedNames:
    def test_functions_and_types(self):
        batch = HistoryBatch(lines=[
            "-- ARCHIVED [1] element -> static",
            "-- type alias Model =",
            "--     {}",
            "--",
            "-- type Msg",
            "--     = ReplaceMe",
            "--",
            *comment_out(_INIT),
        ])
        assert archived_names(batch) == ["Model", "Msg", "init"]

    def test_round_trip_through_archive(self):
        history = archive([_INIT, _VIEW], History(), "x")
        assert archived_names(history.batches[0]) == ["init", "view"]
