"""Depth computation, composite ordering, and selection of the launch target."""

from __future__ import annotations

import logging
import os
from dataclasses import replace
from typing import Sequence

from native_launch.candidates.models import Candidate, describe_candidates
from native_launch.errors import NoExecutablesFound

LOGGER = logging.getLogger(__name__)


def compute_depth(path: str) -> int:
    """Count path segments after normalizing to the platform separator."""

    normalized = os.path.normpath(path.replace("/", os.sep))
    return len(normalized.split(os.sep))


def compute_depths(candidates: Sequence[Candidate]) -> list[Candidate]:
    return [replace(candidate, depth=compute_depth(candidate.path)) for candidate in candidates]


def rank_candidates(candidates: Sequence[Candidate], logger: logging.Logger | None = None) -> list[Candidate]:
    """Order candidates by depth, then score, then weight.

    Realized as three stable sorts: weight descending, score descending,
    depth ascending. The last sort dominates; ties fall back to the order
    left by the earlier ones and finally to input order.
    """

    effective_logger = logger or LOGGER

    ranked = sorted(candidates, key=lambda item: -(item.weight or 0))
    effective_logger.info("ranking.after_weight_sort candidates=%s", describe_candidates(ranked))

    ranked = sorted(ranked, key=lambda item: -(item.score or 0))
    effective_logger.info("ranking.after_score_sort candidates=%s", describe_candidates(ranked))

    ranked = sorted(ranked, key=lambda item: item.depth if item.depth is not None else compute_depth(item.path))
    effective_logger.info("ranking.after_depth_sort candidates=%s", describe_candidates(ranked))
    return ranked


def select_best(ranked: Sequence[Candidate], logger: logging.Logger | None = None) -> Candidate:
    """Return the head of a ranked sequence.

    Only the head is ever launched; alternates are logged for whoever
    embeds this to offer a choice.
    """

    effective_logger = logger or LOGGER
    if not ranked:
        raise NoExecutablesFound()

    best = ranked[0]
    if len(ranked) > 1:
        effective_logger.info(
            "ranking.alternates_ignored chosen=%s alternates=%s",
            best.path,
            [candidate.path for candidate in ranked[1:]],
        )
    return best
