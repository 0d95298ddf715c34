from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

import pytest

from annotext.core.sink import MarkupSink
from annotext.core.styles import StyleCatalog, StyleHandle, StyleKind


ALPHABET = "abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ"


@dataclass(frozen=True, slots=True)
class Bracket:
    """Minimal template writing ``<span class="name">`` markers."""

    name: str | None

    def write_start(self, sink: MarkupSink) -> None:
        sink.start_element(self.name)

    def write_end(self, sink: MarkupSink) -> None:
        sink.end_element()


class RecordingEmitter:
    debug_enabled = False

    def __init__(self) -> None:
        self.warnings: list[str] = []
        self.errors: list[str] = []
        self.events: list[tuple[str, dict[str, Any]]] = []

    def warning(self, message: str, exc: BaseException | None = None) -> None:
        self.warnings.append(message)

    def error(self, message: str, exc: BaseException | None = None) -> None:
        self.errors.append(message)

    def event(self, name: str, payload: Mapping[str, Any]) -> None:
        self.events.append((name, dict(payload)))


def tag(name: str) -> StyleHandle:
    """Handle whose markers are ``<span class="name">`` under ``bracket_catalog``."""
    return StyleHandle(StyleKind.NAMED_ENTITY, name)


@pytest.fixture
def bracket_catalog() -> StyleCatalog:
    return StyleCatalog({StyleKind.NAMED_ENTITY: Bracket})


@pytest.fixture
def emitter() -> RecordingEmitter:
    return RecordingEmitter()
