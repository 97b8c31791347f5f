from __future__ import annotations

from dataclasses import dataclass

from .diagnostic import Diagnostic
from .spans import Mark


@dataclass(slots=True)
class ParseError(Exception):
    diagnostic: Diagnostic

    @property
    def mark(self) -> Mark:
        return self.diagnostic.start

    @property
    def message(self) -> str | None:
        return self.diagnostic.message

    def __str__(self) -> str:
        return self.diagnostic.render()
