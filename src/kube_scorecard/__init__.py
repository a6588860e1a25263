"""Aggregation and grading of Kubernetes manifest check results."""

from .models import Check, CheckOutcome, Grade, ResourceIdentity, ResourceRecord
from .scorecard import Scorecard

__all__ = [
    "Check",
    "CheckOutcome",
    "Grade",
    "ResourceIdentity",
    "ResourceRecord",
    "Scorecard",
]
