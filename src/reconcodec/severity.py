from __future__ import annotations

from enum import IntEnum


class Severity(IntEnum):
    # Ordering only matters for filtering; rendering is the same for all levels.
    DEBUG = 10
    INFO = 20
    NOTE = 30
    WARNING = 40
    ERROR = 50

    @property
    def label(self) -> str:
        return self.name.lower()

    @classmethod
    def parse(cls, label: str) -> Severity:
        try:
            return cls[label.upper()]
        except KeyError:
            raise ValueError(f"unknown severity: {label!r}") from None

    def __str__(self) -> str:
        return self.label
