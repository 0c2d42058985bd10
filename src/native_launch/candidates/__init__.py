"""Candidate probing, scoring, and ranking stages."""

from native_launch.candidates.models import Candidate, candidates_from_paths, describe_candidates
from native_launch.candidates.pipeline import rank_install
from native_launch.candidates.ranking import compute_depth, compute_depths, rank_candidates, select_best
from native_launch.candidates.scoring import BASE_SCORE, compute_scores, score_path
from native_launch.candidates.weights import DEFAULT_STAT_CONCURRENCY, collect_weights, stat_candidate

__all__ = [
    "Candidate",
    "candidates_from_paths",
    "describe_candidates",
    "rank_install",
    "compute_depth",
    "compute_depths",
    "rank_candidates",
    "select_best",
    "BASE_SCORE",
    "compute_scores",
    "score_path",
    "DEFAULT_STAT_CONCURRENCY",
    "collect_weights",
    "stat_candidate",
]
