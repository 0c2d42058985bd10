"""Existence and size checks for declared executables."""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import replace
from pathlib import Path
from typing import Sequence

from native_launch.candidates.models import Candidate

LOGGER = logging.getLogger(__name__)

DEFAULT_STAT_CONCURRENCY = 4


def stat_candidate(install_root: Path, candidate: Candidate, logger: logging.Logger | None = None) -> Candidate | None:
    """Return the candidate annotated with its byte size, or None if it cannot be read."""

    effective_logger = logger or LOGGER
    try:
        stats = (install_root / candidate.path).stat()
    except OSError as exc:
        effective_logger.debug("weights.stat_failed path=%s error=%s", candidate.path, exc)
        return None
    return replace(candidate, weight=stats.st_size)


def collect_weights(
    install_root: Path,
    candidates: Sequence[Candidate],
    *,
    concurrency: int = DEFAULT_STAT_CONCURRENCY,
    logger: logging.Logger | None = None,
) -> list[Candidate]:
    """Stat every candidate with bounded parallelism and keep those that exist.

    Results come back in input order, so later stable sorts tie-break on the
    order the install record declared.
    """

    effective_logger = logger or LOGGER
    if not candidates:
        return []

    worker_count = max(1, concurrency)
    with ThreadPoolExecutor(max_workers=worker_count, thread_name_prefix="stat-worker") as executor:
        stat_results = list(executor.map(lambda item: stat_candidate(install_root, item, effective_logger), candidates))

    kept = [candidate for candidate in stat_results if candidate is not None]
    effective_logger.info(
        "weights.collected install_root=%s declared=%s existing=%s",
        install_root,
        len(candidates),
        len(kept),
    )
    return kept
