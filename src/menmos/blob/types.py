from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Range:
    """An end-inclusive, zero-based byte range: ``Range(0, 9)`` covers 10 bytes."""

    start: int
    end: int

    def __post_init__(self) -> None:
        if self.start < 0:
            raise ValueError(f"invalid range: start {self.start} is negative")
        if self.start > self.end:
            raise ValueError(f"invalid range: {self.start}-{self.end}")

    def __len__(self) -> int:
        return self.end - self.start + 1

    def header_value(self) -> str:
        return f"bytes={self.start}-{self.end}"


__all__ = ["Range"]
