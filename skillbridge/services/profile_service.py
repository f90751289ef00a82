"""
Profile Service - completeness/readiness calculators and blind hiring.

profile_completion and readiness_score are stored on the student document
and consumed by the match scorer. They are recomputed on every profile
change, so the scorer never calculates them itself.
"""

from typing import Optional

ANONYMOUS_NAME = "Anonymous Candidate"

# Completion points
BASE_COMPLETION = 10
BIO_POINTS = 15
COLLEGE_POINTS = 10
LOCATION_POINTS = 10
POINTS_PER_SKILL = 5
MAX_SKILL_POINTS = 25
PROJECT_POINTS = 15
RESUME_POINTS = 5
PORTFOLIO_POINTS = 5
CERTIFICATION_POINTS = 5

# Readiness points
READINESS_PER_SKILL = 10
READINESS_PER_PROJECT = 15


def compute_profile_completion(student: dict) -> int:
    """
    Percentage of the profile that is filled in (10-100).

    >>> compute_profile_completion({})
    10
    """
    completion = BASE_COMPLETION
    if student.get("bio"):
        completion += BIO_POINTS
    if student.get("college"):
        completion += COLLEGE_POINTS
    if student.get("location"):
        completion += LOCATION_POINTS

    skills = student.get("skills") or []
    if skills:
        completion += min(len(skills) * POINTS_PER_SKILL, MAX_SKILL_POINTS)

    if student.get("projects"):
        completion += PROJECT_POINTS
    if student.get("resume_url"):
        completion += RESUME_POINTS
    if student.get("portfolio_url"):
        completion += PORTFOLIO_POINTS
    if student.get("certifications"):
        completion += CERTIFICATION_POINTS

    return min(completion, 100)


def compute_readiness_score(student: dict) -> int:
    """10 points per skill plus 15 per project, capped at 100."""
    skills = len(student.get("skills") or [])
    projects = len(student.get("projects") or [])
    return min(skills * READINESS_PER_SKILL + projects * READINESS_PER_PROJECT, 100)


def with_computed_scores(student: dict) -> dict:
    """Return the completion/readiness fields to $set after a change."""
    return {
        "profile_completion": compute_profile_completion(student),
        "readiness_score": compute_readiness_score(student)
    }


def public_candidate_view(
    student: dict,
    user: Optional[dict] = None,
    force_anonymous: bool = False
) -> dict:
    """
    Candidate summary shown to companies and evaluators.

    Name and college are hidden when the student enabled blind hiring,
    or always for evaluators (force_anonymous).
    """
    anonymous = force_anonymous or student.get("blind_hiring_enabled", True)
    return {
        "uid": student.get("uid"),
        "name": ANONYMOUS_NAME if anonymous else (user or {}).get("name"),
        "college": None if anonymous else student.get("college"),
        "anonymous": anonymous,
        "bio": student.get("bio"),
        "location": student.get("location"),
        "skills": student.get("skills") or [],
        "projects": student.get("projects") or [],
        "certifications": student.get("certifications") or [],
        "readiness_score": student.get("readiness_score", 0),
        "profile_completion": student.get("profile_completion", 0),
        "resume_url": student.get("resume_url"),
        "portfolio_url": student.get("portfolio_url")
    }
