"""
Page model — the in-memory form of one generated page module.

A page is parsed fresh from text at the start of every run, transformed,
and serialized back. Nothing here does I/O.
"""

from __future__ import annotations

import re
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

# Spaces around brackets and commas carry no meaning in a type annotation.
_TIGHT_RE = re.compile(r"\s*([(){}\[\],])\s*")

_OPENERS = "([{"
_CLOSERS = ")]}"


def split_top_level(text: str, separator: str) -> list[str]:
    """Split *text* on *separator*, ignoring separators nested in brackets.

    Parts are stripped; empty parts are dropped.
    """
    parts: list[str] = []
    depth = 0
    start = 0
    i = 0
    while i < len(text):
        ch = text[i]
        if ch in _OPENERS:
            depth += 1
        elif ch in _CLOSERS:
            depth = max(depth - 1, 0)
        elif depth == 0 and text.startswith(separator, i):
            parts.append(text[start:i])
            i += len(separator)
            start = i
            continue
        i += 1
    parts.append(text[start:])
    return [p.strip() for p in parts if p.strip()]


def normalize_type(text: str) -> str:
    """Collapse whitespace so two spellings of one type compare equal."""
    return _TIGHT_RE.sub(r"\1", " ".join(text.split()))


class Signature(BaseModel):
    """A type annotation: parameter types followed by the result type."""

    model_config = ConfigDict(frozen=True)

    params: list[str] = Field(default_factory=list)
    result: str

    @classmethod
    def parse(cls, annotation: str) -> Signature:
        parts = [" ".join(p.split()) for p in split_top_level(annotation, "->")]
        if not parts:
            return cls(result="")
        return cls(params=parts[:-1], result=parts[-1])

    @property
    def arity(self) -> int:
        return len(self.params)

    def render(self) -> str:
        return " -> ".join([*self.params, self.result])

    def key(self) -> tuple[str, ...]:
        """Whitespace-insensitive comparison key."""
        return tuple(normalize_type(p) for p in [*self.params, self.result])


class Declaration(BaseModel):
    """A named top-level unit: an optional signature plus its definition.

    ``lines`` holds the verbatim source, signature included, so a
    superseded declaration can be archived exactly as it was written.
    """

    model_config = ConfigDict(frozen=True)

    name: str
    kind: Literal["function", "type"] = "function"
    signature: Signature | None = None
    signature_lines: int = 0     # how many of ``lines`` belong to the signature
    lines: list[str]
    archived: bool = False

    @property
    def text(self) -> str:
        return "\n".join(self.lines)

    @property
    def body(self) -> str:
        return "\n".join(self.lines[self.signature_lines:])


class TextBlock(BaseModel):
    """Top-level text that is not a declaration (comments, ports, ...)."""

    lines: list[str]

    @property
    def text(self) -> str:
        return "\n".join(self.lines)


class Import(BaseModel):
    """One ``import`` statement."""

    module: str
    alias: str | None = None
    exposing: list[str] | None = None

    @property
    def bound_name(self) -> str:
        """The qualifier this import makes available."""
        return self.alias or self.module

    def render(self) -> str:
        text = f"import {self.module}"
        if self.alias:
            text += f" as {self.alias}"
        if self.exposing is not None:
            text += f" exposing ({', '.join(self.exposing)})"
        return text


class ModuleHeader(BaseModel):
    """The ``module X exposing (...)`` line."""

    name: str
    exposing: list[str] = Field(default_factory=list)
    port: bool = False

    def render(self) -> str:
        prefix = "port module" if self.port else "module"
        return f"{prefix} {self.name} exposing ({', '.join(self.exposing)})"


class HistoryBatch(BaseModel):
    """One run's worth of archived declarations, as comment text.

    Write-once: batches read back from a file are carried verbatim.
    """

    model_config = ConfigDict(frozen=True)

    lines: list[str]

    @property
    def marker(self) -> str:
        return self.lines[0] if self.lines else ""

    @property
    def text(self) -> str:
        return "\n".join(self.lines)


class History(BaseModel):
    """Archived batches, oldest first."""

    model_config = ConfigDict(frozen=True)

    batches: list[HistoryBatch] = Field(default_factory=list)

    def append(self, batch: HistoryBatch) -> History:
        """Return a new history with *batch* added after every existing one."""
        return History(batches=[*self.batches, batch])

    @property
    def count(self) -> int:
        return len(self.batches)

    @property
    def text(self) -> str:
        return "\n\n\n".join(b.text for b in self.batches)


class PageModule(BaseModel):
    """A parsed page: header, imports, top-level body, archived history.

    ``body`` keeps declarations and other top-level text interleaved in
    source order.
    ``doc`` is the module documentation comment, which Elm places
    between the header and the imports.
    """

    header: ModuleHeader
    doc: TextBlock | None = None
    imports: list[Import] = Field(default_factory=list)
    body: list[Declaration | TextBlock] = Field(default_factory=list)
    history: History = Field(default_factory=History)

    @property
    def name(self) -> str:
        return self.header.name

    @property
    def exposing(self) -> list[str]:
        return self.header.exposing

    @property
    def declarations(self) -> list[Declaration]:
        return [b for b in self.body if isinstance(b, Declaration)]

    def get(self, name: str) -> Declaration | None:
        """First declaration named *name*, if any."""
        for decl in self.declarations:
            if decl.name == name:
                return decl
        return None

    def get_import(self, module: str) -> Import | None:
        for imp in self.imports:
            if imp.module == module:
                return imp
        return None
