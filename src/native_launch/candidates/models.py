"""Candidate records flowing through the ranking stages."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Iterable, Sequence


@dataclass(frozen=True, slots=True)
class Candidate:
    """A possible entry point, relative to the install root.

    Each stage fills in one more field and returns a new record.
    """

    path: str
    weight: int | None = None
    score: int | None = None
    depth: int | None = None

    def to_dict(self) -> dict[str, object]:
        return asdict(self)


def candidates_from_paths(paths: Iterable[str]) -> list[Candidate]:
    """Build the initial candidate set from declared relative paths."""

    return [Candidate(path=path) for path in paths]


def describe_candidates(candidates: Sequence[Candidate]) -> list[dict[str, object]]:
    """Render candidates for log lines."""

    return [candidate.to_dict() for candidate in candidates]
