# ==============================================
# CLASSIFICATION
# ==============================================
#
# Locates the response envelope of a normalized payload, reads its
# Ack status and turns the various error shapes into one outcome.
#
# Modules:
# --------
# - outcome.py             → OutcomeKind, ErrorEntry, ResponseOutcome
# - response_classifier.py → ResponseClassifier
#
# ==============================================

from .outcome import ErrorClassification, ErrorEntry, OutcomeKind, ResponseOutcome
from .response_classifier import ResponseClassifier

__all__ = [
    "ErrorClassification",
    "ErrorEntry",
    "OutcomeKind",
    "ResponseOutcome",
    "ResponseClassifier",
]
