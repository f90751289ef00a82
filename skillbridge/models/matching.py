"""
Matching models - inputs and outputs of the match scorer.

These are internal value objects, built from MongoDB documents by the
routes and handed to MatchScorer. They never perform I/O.
"""

import math
from typing import Any, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator


def clean_skills(values: Any) -> List[str]:
    """
    Normalize a skill list: strip whitespace, drop blanks, collapse
    case-insensitive duplicates (first spelling wins).

    Skill lists are sets: a posting requiring ["Python", "python"] counts
    one required skill, so a match reads "1/1 skills matched", not "2/2".
    """
    if not values:
        return []
    if isinstance(values, str):
        values = [values]

    cleaned = []
    seen = set()
    for value in values:
        if value is None:
            continue
        skill = str(value).strip()
        key = skill.lower()
        if not skill or key in seen:
            continue
        seen.add(key)
        cleaned.append(skill)
    return cleaned


def to_percentage(value: Any) -> float:
    """Coerce to a number in [0, 100]; anything non-numeric becomes 0."""
    if isinstance(value, bool):
        return 0.0
    try:
        number = float(value)
    except (TypeError, ValueError):
        return 0.0
    if math.isnan(number):
        return 0.0
    return max(0.0, min(100.0, number))


class MatchWeights(BaseModel):
    """Point weights of each score component."""
    model_config = ConfigDict(frozen=True)

    skills: float = Field(70.0, ge=0)
    profile: float = Field(15.0, ge=0)
    readiness: float = Field(0.0, ge=0)
    per_project: float = Field(0.0, ge=0)


# Browse/apply context: skills 70 + profile 15 + readiness 15
BROWSE_WEIGHTS = MatchWeights(skills=70, profile=15, readiness=15, per_project=0)

# Recommendation feed: skills 70 + profile 15 + 5 per project
RECOMMENDATION_WEIGHTS = MatchWeights(skills=70, profile=15, readiness=0, per_project=5)


class CandidateProfile(BaseModel):
    skills: List[str] = Field(default_factory=list)
    profile_completion: float = 0.0
    readiness_score: float = 0.0
    projects: List[Any] = Field(default_factory=list)

    @field_validator("skills", mode="before")
    @classmethod
    def _clean_skills(cls, value):
        return clean_skills(value)

    @field_validator("profile_completion", "readiness_score", mode="before")
    @classmethod
    def _clamp_percentage(cls, value):
        return to_percentage(value)

    @field_validator("projects", mode="before")
    @classmethod
    def _default_projects(cls, value):
        if not value:
            return []
        return list(value)

    @classmethod
    def from_document(cls, doc: Optional[dict]) -> "CandidateProfile":
        """Build from a `students` collection document."""
        doc = doc or {}
        return cls(
            skills=doc.get("skills"),
            profile_completion=doc.get("profile_completion"),
            readiness_score=doc.get("readiness_score"),
            projects=doc.get("projects")
        )


class OpportunityPosting(BaseModel):
    """Required skills drive scoring; the rest is display pass-through."""
    required_skills: List[str] = Field(default_factory=list)
    id: Optional[str] = None
    role: Optional[str] = None
    company_name: Optional[str] = None
    location: Optional[str] = None
    type: Optional[str] = None
    difficulty: Optional[str] = None

    @field_validator("required_skills", mode="before")
    @classmethod
    def _clean_skills(cls, value):
        return clean_skills(value)

    @classmethod
    def from_document(cls, doc: dict) -> "OpportunityPosting":
        """Build from an `internships` collection document."""
        return cls(
            required_skills=doc.get("required_skills"),
            id=doc.get("id"),
            role=doc.get("role"),
            company_name=doc.get("company_name"),
            location=doc.get("location"),
            type=doc.get("type"),
            difficulty=doc.get("difficulty")
        )


class MatchResult(BaseModel):
    """Score and explanation for one candidate/posting pair."""
    model_config = ConfigDict(frozen=True)

    score: int = Field(0, ge=0, le=100)
    reasons: Tuple[str, ...] = ()
    matched_skills: Tuple[str, ...] = ()

    def snapshot(self) -> dict:
        """Fields embedded into an Application document at apply time."""
        return {
            "match_score": self.score,
            "match_reasons": list(self.reasons)
        }
