"""Candidate computation and the human-like move heuristic."""

from .candidates import candidates_for, compute_candidates
from .heuristic import AIMove, AIReason, next_ai_move

__all__ = [
    "candidates_for",
    "compute_candidates",
    "AIMove",
    "AIReason",
    "next_ai_move",
]
