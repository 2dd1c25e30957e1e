"""Reasons a fetched match is not turned into a sample."""
from enum import Enum


class RejectionReason(Enum):
    INELIGIBLE_MODE = "ineligible_mode"
    MISSING_FIELDS = "missing_fields"
    IN_PROGRESS = "in_progress"
