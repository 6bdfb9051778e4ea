from .guard import (
    Assigned,
    Diagnosis,
    Failed,
    Outcome,
    Skipped,
    diagnose,
    evaluate_and_assign,
    outranks,
)

__all__ = [
    "Assigned",
    "Diagnosis",
    "Failed",
    "Outcome",
    "Skipped",
    "diagnose",
    "evaluate_and_assign",
    "outranks",
]
