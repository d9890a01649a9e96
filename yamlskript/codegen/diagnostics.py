"""Non-fatal emission diagnostics."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterator, List, Optional

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class UnhandledNodeKind:
    """An emitter met a node whose kind has no emission rule."""

    category: str
    kind: Optional[str]
    source: Optional[str] = None

    def format(self) -> str:
        location = f" in {self.source}" if self.source else ""
        return f"Unhandled {self.category} type: {self.kind}{location}"


class Diagnostics:
    """
    Collector for the unhandled-kind diagnostics of one compile.

    Emitters record a diagnostic and carry on with the next sibling; the
    orchestration layer decides whether any recorded diagnostic should fail
    the build.
    """

    def __init__(self, source: Optional[str] = None):
        self.source = source
        self._items: List[UnhandledNodeKind] = []

    def unhandled(self, category: str, kind: Optional[str]) -> UnhandledNodeKind:
        diagnostic = UnhandledNodeKind(category=category, kind=kind, source=self.source)
        self._items.append(diagnostic)
        logger.warning(diagnostic.format())
        return diagnostic

    @property
    def items(self) -> List[UnhandledNodeKind]:
        return list(self._items)

    def __iter__(self) -> Iterator[UnhandledNodeKind]:
        return iter(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __bool__(self) -> bool:
        return bool(self._items)


__all__ = ["UnhandledNodeKind", "Diagnostics"]
