"""
Models module - internal value objects (not the API contract, see schemas).
"""
from skillbridge.models.matching import (
    BROWSE_WEIGHTS,
    RECOMMENDATION_WEIGHTS,
    CandidateProfile,
    MatchResult,
    MatchWeights,
    OpportunityPosting,
)

__all__ = [
    "BROWSE_WEIGHTS",
    "RECOMMENDATION_WEIGHTS",
    "CandidateProfile",
    "MatchResult",
    "MatchWeights",
    "OpportunityPosting",
]
