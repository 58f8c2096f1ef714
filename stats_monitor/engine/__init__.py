from .failure_counter import FailureCounter
from .parser import parse_stats
from .threshold_evaluator import ThresholdEvaluator

__all__ = [
    "FailureCounter",
    "parse_stats",
    "ThresholdEvaluator",
]
