"""
Matching Service

PURPOSE:
Score how well a student fits an internship and rank internships for a
student.

HOW IT WORKS:
1. Compare student skills with the posting's required skills
   (case-insensitive, pluggable matcher)
2. Add weighted profile-completion, readiness and project components
3. Round half up and clamp to 0-100
4. Explain the score with short reasons

Two weight presets exist (see skillbridge.models.matching):
- BROWSE_WEIGHTS: internship list and apply-time snapshot
- RECOMMENDATION_WEIGHTS: the "recommended for you" feed

Everything here is pure: no database access, no shared state.
"""

import logging
import math
from abc import ABC, abstractmethod
from typing import Iterable, List, Optional, Tuple

from skillbridge.models.matching import (
    BROWSE_WEIGHTS,
    RECOMMENDATION_WEIGHTS,
    CandidateProfile,
    MatchResult,
    MatchWeights,
    OpportunityPosting,
)

logger = logging.getLogger(__name__)


REASON_SKILLS = "{matched}/{required} skills matched"
REASON_PROJECTS = "Relevant project experience"
REASON_PROFILE = "Complete profile boosts visibility"

COMPLETE_PROFILE_THRESHOLD = 80


# ============================================================
# SKILL MATCHERS
# ============================================================

class SkillMatcher(ABC):
    """Decides whether a candidate skill satisfies a required skill."""

    @abstractmethod
    def is_match(self, candidate_skill: str, required_skill: str) -> bool:
        """Both arguments arrive lowercased."""

    def matched_skills(
        self,
        candidate_skills: Iterable[str],
        required_skills: Iterable[str]
    ) -> List[str]:
        """
        Required skills satisfied by at least one candidate skill.

        Returned in the posting's original spelling and order.
        """
        candidate_lower = [s.lower() for s in candidate_skills]
        return [
            required for required in required_skills
            if any(self.is_match(c, required.lower()) for c in candidate_lower)
        ]


class SubstringSkillMatcher(SkillMatcher):
    """
    Bidirectional containment: "react" matches "react.js" and vice versa.

    Loose on purpose; short skills like "r" will match "react".
    """

    def is_match(self, candidate_skill: str, required_skill: str) -> bool:
        return candidate_skill in required_skill or required_skill in candidate_skill


class ExactSkillMatcher(SkillMatcher):
    """Case-insensitive equality only."""

    def is_match(self, candidate_skill: str, required_skill: str) -> bool:
        return candidate_skill == required_skill


# ============================================================
# SCORING
# ============================================================

def round_half_up(value: float) -> int:
    """Round .5 upwards (Python's round() would round to even)."""
    return int(math.floor(value + 0.5))


def build_reasons(
    matched_count: int,
    required_count: int,
    candidate: CandidateProfile
) -> List[str]:
    """Human-readable explanation, in display order."""
    reasons = []
    if matched_count > 0:
        reasons.append(REASON_SKILLS.format(matched=matched_count, required=required_count))
    if candidate.projects:
        reasons.append(REASON_PROJECTS)
    if candidate.profile_completion >= COMPLETE_PROFILE_THRESHOLD:
        reasons.append(REASON_PROFILE)
    return reasons


class MatchScorer:
    """
    Weighted skill-match scorer.

    Usage:
        scorer = MatchScorer(BROWSE_WEIGHTS)
        result = scorer.score(candidate, posting)
        ranked = scorer.rank_all(candidate, postings)
    """

    def __init__(
        self,
        weights: MatchWeights = BROWSE_WEIGHTS,
        matcher: Optional[SkillMatcher] = None
    ):
        self.weights = weights
        self.matcher = matcher or SubstringSkillMatcher()

    def score(self, candidate: CandidateProfile, posting: OpportunityPosting) -> MatchResult:
        """
        Compute score, reasons and matched skills for one posting.

        A candidate without skills always scores 0 with no reasons.
        """
        if not candidate.skills:
            return MatchResult()

        required = posting.required_skills
        matched = self.matcher.matched_skills(candidate.skills, required)

        if required:
            skill_score = (len(matched) / len(required)) * self.weights.skills
        else:
            skill_score = 0.0
        profile_score = (candidate.profile_completion / 100) * self.weights.profile
        readiness_score = (candidate.readiness_score / 100) * self.weights.readiness
        project_score = len(candidate.projects) * self.weights.per_project

        total = round_half_up(skill_score + profile_score + readiness_score + project_score)
        total = max(0, min(total, 100))

        return MatchResult(
            score=total,
            reasons=tuple(build_reasons(len(matched), len(required), candidate)),
            matched_skills=tuple(matched)
        )

    def rank_all(
        self,
        candidate: CandidateProfile,
        postings: Iterable[OpportunityPosting]
    ) -> List[Tuple[OpportunityPosting, MatchResult]]:
        """
        Score every posting and sort by descending score.

        The sort is stable: equal scores keep their input order.
        """
        scored = [(posting, self.score(candidate, posting)) for posting in postings]
        scored.sort(key=lambda pair: pair[1].score, reverse=True)
        logger.debug("Ranked %d postings", len(scored))
        return scored

    def recommend(
        self,
        candidate: CandidateProfile,
        postings: Iterable[OpportunityPosting],
        top_n: int = 3
    ) -> List[Tuple[OpportunityPosting, MatchResult]]:
        """Top N non-zero matches."""
        ranked = self.rank_all(candidate, postings)
        return [pair for pair in ranked if pair[1].score > 0][:top_n]


# ============================================================
# CONVENIENCE FUNCTIONS
# ============================================================

def get_browse_scorer() -> MatchScorer:
    """Scorer for the internship list and apply-time snapshot."""
    return MatchScorer(BROWSE_WEIGHTS)


def get_recommendation_scorer() -> MatchScorer:
    """Scorer for the recommendation feed."""
    return MatchScorer(RECOMMENDATION_WEIGHTS)
