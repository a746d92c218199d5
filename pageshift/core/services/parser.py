"""
Page parser — split generated Elm page text into a PageModule.

This is deliberately not an Elm parser. Generated pages are flat: a
module header, imports, and column-0 declarations whose bodies are
indented. Recognizing those line shapes is enough to find and rewrite
every top-level declaration.

Public API:
    parse_page(text)  → PageModule
"""

from __future__ import annotations

import logging
import re

from pageshift.core.errors import UnrecognizedShape
from pageshift.core.models.page import (
    Declaration,
    History,
    HistoryBatch,
    Import,
    ModuleHeader,
    PageModule,
    Signature,
    TextBlock,
    split_top_level,
)
from pageshift.core.services.history import ARCHIVE_MARKER

logger = logging.getLogger(__name__)


_MODULE_RE = re.compile(r"^(port\s+)?module\s+([\w.]+)")
_IMPORT_RE = re.compile(r"^import\s+([\w.]+)(?:\s+as\s+(\w+))?")
_TYPE_RE = re.compile(r"^type\s+(?:alias\s+)?([A-Z]\w*)")
_SIGNATURE_RE = re.compile(r"^([a-z_][\w']*)\s*:(?!:)(.*)$")
_DEFINITION_RE = re.compile(r"^([a-z_][\w']*)\b[^=]*=(?!=)")


def _is_indented(line: str) -> bool:
    return bool(line) and line[0] in " \t"


def _trim_trailing_blanks(lines: list[str]) -> list[str]:
    end = len(lines)
    while end and not lines[end - 1].strip():
        end -= 1
    return lines[:end]


def _paren_balance(text: str) -> int:
    return text.count("(") - text.count(")")


def _collect_parenthesized(lines: list[str], i: int) -> tuple[str, int]:
    """Join lines starting at *i* until parentheses balance.

    Returns the joined text and the index of the first unconsumed line.
    """
    text = lines[i]
    i += 1
    while i < len(lines) and (_paren_balance(text) > 0 or text.endswith("exposing")):
        text += " " + lines[i].strip()
        i += 1
    return text, i


def _exposing_list(text: str) -> list[str] | None:
    """Items of the ``exposing (...)`` clause in *text*, or None if absent."""
    idx = text.find("exposing")
    if idx < 0:
        return None
    start = text.find("(", idx)
    end = text.rfind(")")
    if start < 0 or end < start:
        return None
    return split_top_level(text[start + 1:end], ",")


# ── Block readers ───────────────────────────────────────────────────
#
# Each reader takes the line list and a start index, and returns the
# parsed item plus the index of the first line it did not consume.


def _read_header(lines: list[str], i: int) -> tuple[ModuleHeader, int]:
    text, i = _collect_parenthesized(lines, i)
    m = _MODULE_RE.match(text)
    assert m is not None
    return (
        ModuleHeader(
            name=m.group(2),
            exposing=_exposing_list(text) or [],
            port=bool(m.group(1)),
        ),
        i,
    )


def _read_import(lines: list[str], i: int) -> tuple[Import, int]:
    text, i = _collect_parenthesized(lines, i)
    m = _IMPORT_RE.match(text)
    assert m is not None
    return Import(module=m.group(1), alias=m.group(2), exposing=_exposing_list(text)), i


def _read_continuation(lines: list[str], i: int, *, blanks: bool) -> int:
    """Advance past indented lines (and blank ones if *blanks*)."""
    while i < len(lines):
        line = lines[i]
        if _is_indented(line) or (blanks and not line.strip()):
            i += 1
        else:
            break
    return i


def _read_type(lines: list[str], i: int) -> tuple[Declaration, int]:
    m = _TYPE_RE.match(lines[i])
    assert m is not None
    end = _read_continuation(lines, i + 1, blanks=True)
    return Declaration(name=m.group(1), kind="type", lines=_trim_trailing_blanks(lines[i:end])), end


def _starts_definition(line: str, name: str) -> bool:
    m = _DEFINITION_RE.match(line)
    return bool(m) and m.group(1) == name


def _read_function(lines: list[str], i: int) -> tuple[Declaration, int]:
    start = i
    signature: Signature | None = None
    signature_lines = 0

    sig = _SIGNATURE_RE.match(lines[i])
    if sig:
        name = sig.group(1)
        end = _read_continuation(lines, i + 1, blanks=False)
        annotation = " ".join([sig.group(2), *(ln.strip() for ln in lines[i + 1:end])])
        signature = Signature.parse(annotation)
        signature_lines = end - i
        i = end
        if i < len(lines) and _starts_definition(lines[i], name):
            i = _read_continuation(lines, i + 1, blanks=True)
    else:
        m = _DEFINITION_RE.match(lines[i])
        assert m is not None
        name = m.group(1)
        i = _read_continuation(lines, i + 1, blanks=True)

    return (
        Declaration(
            name=name,
            signature=signature,
            signature_lines=signature_lines,
            lines=_trim_trailing_blanks(lines[start:i]),
        ),
        i,
    )


def _read_block_comment(lines: list[str], i: int) -> tuple[list[str], int]:
    """Consume a ``{- ... -}`` comment, which may hold unindented lines."""
    start = i
    depth = 0
    while i < len(lines):
        depth += lines[i].count("{-") - lines[i].count("-}")
        i += 1
        if depth <= 0:
            break
    return lines[start:i], i


def _read_history(lines: list[str], i: int) -> tuple[list[HistoryBatch], int]:
    """Consume an archived region: comment and blank lines from a marker on.

    Archived lines are contiguous, so a plain comment after a blank line
    ends the region and is left as loose text.
    """
    batches: list[list[str]] = []
    while i < len(lines):
        line = lines[i]
        if line.startswith(ARCHIVE_MARKER):
            batches.append([line])
        elif line.startswith("--") and lines[i - 1].strip():
            batches[-1].append(line)
        elif not line.strip():
            batches[-1].append(line)
        else:
            break
        i += 1
    return [HistoryBatch(lines=_trim_trailing_blanks(b)) for b in batches], i


def _is_text_boundary(line: str) -> bool:
    """Whether *line* starts something other than loose top-level text."""
    return (
        not line.strip()
        or line.startswith(("module ", "port module ", "import ", "{-", ARCHIVE_MARKER))
        or bool(_TYPE_RE.match(line) or _SIGNATURE_RE.match(line) or _DEFINITION_RE.match(line))
    )


# ── Entry point ─────────────────────────────────────────────────────


def parse_page(text: str) -> PageModule:
    """Parse page source into a PageModule.

    Raises:
        UnrecognizedShape: If the text has no ``module`` header.
    """
    lines = [line.rstrip() for line in text.splitlines()]

    header: ModuleHeader | None = None
    doc: TextBlock | None = None
    imports: list[Import] = []
    body: list[Declaration | TextBlock] = []
    batches: list[HistoryBatch] = []

    i = 0
    while i < len(lines):
        line = lines[i]

        if not line.strip():
            i += 1
        elif _MODULE_RE.match(line) and header is None:
            header, i = _read_header(lines, i)
        elif _IMPORT_RE.match(line):
            imp, i = _read_import(lines, i)
            imports.append(imp)
        elif line.startswith(ARCHIVE_MARKER):
            found, i = _read_history(lines, i)
            batches.extend(found)
        elif line.startswith("{-"):
            comment, i = _read_block_comment(lines, i)
            if header is not None and doc is None and not (imports or body or batches):
                doc = TextBlock(lines=comment)
            else:
                body.append(TextBlock(lines=comment))
        elif _TYPE_RE.match(line):
            decl, i = _read_type(lines, i)
            body.append(decl)
        elif _SIGNATURE_RE.match(line) or _DEFINITION_RE.match(line):
            decl, i = _read_function(lines, i)
            body.append(decl)
        else:
            start = i
            i = _read_continuation(lines, i + 1, blanks=False)
            while i < len(lines) and not _is_text_boundary(lines[i]):
                i = _read_continuation(lines, i + 1, blanks=False)
            body.append(TextBlock(lines=lines[start:i]))

    if header is None:
        raise UnrecognizedShape("no 'module' header found")

    page = PageModule(
        header=header,
        doc=doc,
        imports=imports,
        body=body,
        history=History(batches=batches),
    )
    logger.debug(
        "Parsed %s: %d imports, %d declarations, %d archived batches",
        page.name,
        len(page.imports),
        len(page.declarations),
        page.history.count,
    )
    return page
