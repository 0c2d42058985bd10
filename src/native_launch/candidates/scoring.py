"""Filename heuristics that score how likely a candidate is the real entry point."""

from __future__ import annotations

import logging
import re
from dataclasses import replace
from typing import Sequence

from native_launch.candidates.models import Candidate

LOGGER = logging.getLogger(__name__)

BASE_SCORE = 100

# (pattern, delta) pairs; every matching rule applies.
ADDITIVE_RULES: tuple[tuple[re.Pattern[str], int], ...] = (
    (re.compile(r"unins.*\.exe$", re.IGNORECASE), -50),
    (re.compile(r"^kick\.bin", re.IGNORECASE), -50),
    (re.compile(r"nwjc\.exe$", re.IGNORECASE), -20),
    (re.compile(r"\.sh$", re.IGNORECASE), 20),
)

# Any match pins the score to zero regardless of the additive rules.
EXCLUDING_RULES: tuple[re.Pattern[str], ...] = (
    re.compile(r"dxwebsetup.*\.exe$", re.IGNORECASE),
    re.compile(r"vcredist.*\.exe$", re.IGNORECASE),
    re.compile(r"\.(?:so|dylib)(?:\.\d+)*$", re.IGNORECASE),
)


def score_path(path: str) -> int:
    """Score a relative path; 0 means never launch it."""

    for pattern in EXCLUDING_RULES:
        if pattern.search(path):
            return 0

    score = BASE_SCORE
    for pattern, delta in ADDITIVE_RULES:
        if pattern.search(path):
            score += delta
    return max(0, score)


def compute_scores(candidates: Sequence[Candidate], logger: logging.Logger | None = None) -> list[Candidate]:
    """Attach scores and drop every candidate that scores zero or less."""

    effective_logger = logger or LOGGER
    output: list[Candidate] = []
    for candidate in candidates:
        score = score_path(candidate.path)
        if score <= 0:
            effective_logger.info("scoring.dropped path=%s score=%s", candidate.path, score)
            continue
        output.append(replace(candidate, score=score))
    return output
