"""
Recommendation Routes

GET /recommendations - Top internship matches for the current student
"""

from fastapi import APIRouter, Depends, Query
from typing import Optional

from skillbridge.core.auth import get_current_student
from skillbridge.core.config import get_settings
from skillbridge.models.matching import CandidateProfile, OpportunityPosting
from skillbridge.services.matching_service import get_recommendation_scorer
from skillbridge.services.mongo_service import StudentProfileService, InternshipService
from skillbridge.schemas.schemas import RecommendationResponse, RecommendationListResponse

router = APIRouter(prefix="/recommendations", tags=["Recommendations"])


@router.get("", response_model=RecommendationListResponse)
async def get_recommendations(
    top_n: Optional[int] = Query(None, ge=1, le=20),
    student: dict = Depends(get_current_student)
):
    """
    Recommended internships.

    Scoring:
    - Skills match: 70 points
    - Profile completion: 15 points
    - 5 points per project

    Only internships with a score above 0 are returned. A student with no
    skills gets an empty list.
    """
    profile = StudentProfileService().get(student["uid"]) or {}
    candidate = CandidateProfile.from_document(profile)
    postings = [OpportunityPosting.from_document(i) for i in InternshipService().list()]

    top = get_recommendation_scorer().recommend(
        candidate,
        postings,
        top_n=top_n or get_settings().recommendation_top_n
    )

    recs = [
        RecommendationResponse(
            internship_id=posting.id,
            role=posting.role or "",
            company_name=posting.company_name or "",
            location=posting.location,
            type=posting.type,
            difficulty=posting.difficulty,
            match_score=result.score,
            matched_skills=list(result.matched_skills)
        ) for posting, result in top
    ]

    return RecommendationListResponse(recommendations=recs, total=len(recs))
