"""
Internship Routes

POST /internships - Create internship posting (company only)
GET /internships - List internships with filters
GET /internships/matches - All internships ranked by match for the student
GET /internships/{internship_id} - Get internship details
PUT /internships/{internship_id} - Update internship (owner only)
DELETE /internships/{internship_id} - Delete internship (owner only)
POST /internships/{internship_id}/apply - Apply to internship (student only)
"""

import logging

from fastapi import APIRouter, HTTPException, Depends, Query
from typing import List, Optional

from skillbridge.core.auth import get_current_student, get_current_company
from skillbridge.models.matching import CandidateProfile, OpportunityPosting
from skillbridge.services.application_service import AlreadyApplied, get_application_workflow
from skillbridge.services.matching_service import get_browse_scorer
from skillbridge.services.mongo_service import (
    InternshipService, CompanyProfileService, StudentProfileService, ApplicationRecordService
)
from skillbridge.schemas.schemas import (
    InternshipCreate, InternshipUpdate, InternshipResponse, InternshipMatchResponse,
    MatchResultResponse, ApplicationResponse, InternshipType, Difficulty, MessageResponse
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/internships", tags=["Internships"])


@router.post("", response_model=InternshipResponse, status_code=201)
async def create_internship(internship: InternshipCreate, company: dict = Depends(get_current_company)):
    """
    Create a new internship posting. Only companies can post.

    At least one required skill is mandatory (validated by the schema).
    """
    companies = CompanyProfileService()
    profile = companies.get(company["uid"])
    company_name = (profile or {}).get("company_name") or company["name"]

    data = internship.model_dump(mode="json")
    data["role"] = data["role"].strip()

    created = InternshipService().insert(company["uid"], company_name, data)
    companies.add_internship(company["uid"], created["id"])

    logger.info("Company %s posted internship %s", company["uid"], created["id"])
    return InternshipResponse(**created)


@router.get("", response_model=List[InternshipResponse])
async def list_internships(
    search: Optional[str] = Query(None, description="Search in role, company and description"),
    type: Optional[InternshipType] = Query(None),
    difficulty: Optional[Difficulty] = Query(None),
    company_id: Optional[str] = Query(None)
):
    """List internships, newest first."""
    internships = InternshipService().list(
        search=search,
        internship_type=type.value if type else None,
        difficulty=difficulty.value if difficulty else None,
        company_id=company_id
    )
    return [InternshipResponse(**i) for i in internships]


@router.get("/matches", response_model=List[InternshipMatchResponse])
async def list_matches(
    search: Optional[str] = Query(None),
    type: Optional[InternshipType] = Query(None),
    difficulty: Optional[Difficulty] = Query(None),
    student: dict = Depends(get_current_student)
):
    """
    Internships ranked for the current student.

    Uses the browse weights (skills 70, profile 15, readiness 15).
    Equal scores keep the newest-first order.
    """
    profile = StudentProfileService().get(student["uid"]) or {}
    candidate = CandidateProfile.from_document(profile)

    internships = InternshipService().list(
        search=search,
        internship_type=type.value if type else None,
        difficulty=difficulty.value if difficulty else None
    )
    by_id = {i["id"]: i for i in internships}
    applied = ApplicationRecordService().applied_internship_ids(student["uid"])

    ranked = get_browse_scorer().rank_all(
        candidate,
        [OpportunityPosting.from_document(i) for i in internships]
    )

    return [
        InternshipMatchResponse(
            internship=InternshipResponse(**by_id[posting.id]),
            match=MatchResultResponse(
                score=result.score,
                reasons=list(result.reasons),
                matched_skills=list(result.matched_skills)
            ),
            already_applied=posting.id in applied
        )
        for posting, result in ranked
    ]


@router.get("/{internship_id}", response_model=InternshipResponse)
async def get_internship(internship_id: str):
    internship = InternshipService().get(internship_id)
    if not internship:
        raise HTTPException(status_code=404, detail="Internship not found")
    return InternshipResponse(**internship)


@router.put("/{internship_id}", response_model=InternshipResponse)
async def update_internship(
    internship_id: str,
    data: InternshipUpdate,
    company: dict = Depends(get_current_company)
):
    """Update internship. Only the posting company can update."""
    fields = data.model_dump(mode="json", exclude_none=True)
    if not fields:
        raise HTTPException(status_code=400, detail="No fields to update")

    service = InternshipService()
    if not service.update(internship_id, company["uid"], fields):
        raise HTTPException(status_code=404, detail="Internship not found or not owned by you")

    return InternshipResponse(**service.get(internship_id))


@router.delete("/{internship_id}", response_model=MessageResponse)
async def delete_internship(internship_id: str, company: dict = Depends(get_current_company)):
    """Delete internship. Only the posting company can delete."""
    if not InternshipService().delete(internship_id, company["uid"]):
        raise HTTPException(status_code=404, detail="Internship not found or not owned by you")

    CompanyProfileService().remove_internship(company["uid"], internship_id)
    return MessageResponse(message="Internship deleted")


@router.post("/{internship_id}/apply", response_model=ApplicationResponse, status_code=201)
async def apply_to_internship(internship_id: str, student: dict = Depends(get_current_student)):
    """
    Apply to an internship.

    The match score and reasons are computed now and stored on the
    application; later profile edits do not change them.
    """
    internship = InternshipService().get(internship_id)
    if not internship:
        raise HTTPException(status_code=404, detail="Internship not found")

    profile = StudentProfileService().get(student["uid"])
    if not profile:
        raise HTTPException(status_code=404, detail="Student profile not found")

    try:
        application = get_application_workflow().apply(profile, internship)
    except AlreadyApplied:
        raise HTTPException(status_code=400, detail="Already applied to this internship")

    return ApplicationResponse(
        **application,
        internship_role=internship.get("role"),
        company_name=internship.get("company_name")
    )
