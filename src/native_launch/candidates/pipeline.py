"""Run the candidate stages for one install record."""

from __future__ import annotations

import logging

from native_launch.candidates.models import Candidate, candidates_from_paths, describe_candidates
from native_launch.candidates.ranking import compute_depths, rank_candidates
from native_launch.candidates.scoring import compute_scores
from native_launch.candidates.weights import collect_weights
from native_launch.config import AppSettings
from native_launch.install import InstallRecord

LOGGER = logging.getLogger(__name__)


def rank_install(
    record: InstallRecord,
    settings: AppSettings,
    *,
    logger: logging.Logger | None = None,
) -> list[Candidate]:
    """Stat, score, and rank the declared executables of an install.

    An empty result means nothing is launchable; callers decide whether
    that is an error.
    """

    effective_logger = logger or LOGGER
    install_root = record.install_root

    candidates = candidates_from_paths(record.executables)
    effective_logger.info("launch.initial_candidates candidates=%s", describe_candidates(candidates))

    candidates = collect_weights(
        install_root,
        candidates,
        concurrency=settings.launch.stat_concurrency,
        logger=effective_logger,
    )
    candidates = compute_scores(candidates, logger=effective_logger)
    candidates = compute_depths(candidates)
    return rank_candidates(candidates, logger=effective_logger)
