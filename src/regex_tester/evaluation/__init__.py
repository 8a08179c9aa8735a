"""Pattern compilation and match reporting."""

from .evaluator import EvaluationResult, Evaluator
from .formatting import UNMATCHED, format_error, format_matches, group_labels

__all__ = [
    "EvaluationResult",
    "Evaluator",
    "UNMATCHED",
    "format_error",
    "format_matches",
    "group_labels",
]
