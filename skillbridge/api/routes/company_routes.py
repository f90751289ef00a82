"""
Company Routes

GET /companies/profile - Get own profile
PUT /companies/profile - Update profile
GET /companies/internships - Get company's internships
GET /companies/internships/{id}/applicants - Applicants ranked by match score
PUT /companies/applications/{id}/status - Update application status
"""

from fastapi import APIRouter, HTTPException, Depends
from typing import List

from skillbridge.core.auth import get_current_company, get_user_by_uid, get_users_by_uid
from skillbridge.services.application_service import (
    InvalidStatusTransition, StatusConflict, get_application_workflow
)
from skillbridge.services.mongo_service import (
    CompanyProfileService, InternshipService, StudentProfileService, ApplicationRecordService
)
from skillbridge.services.profile_service import public_candidate_view
from skillbridge.schemas.schemas import (
    CompanyUpdate, CompanyResponse, InternshipResponse, ApplicantResponse,
    ApplicationResponse, ApplicationStatusUpdate, CandidateResponse
)

router = APIRouter(prefix="/companies", tags=["Companies"])


def _owned_internship(internship_id: str, company: dict) -> dict:
    internship = InternshipService().get(internship_id)
    if not internship:
        raise HTTPException(status_code=404, detail="Internship not found")
    if internship["company_id"] != company["uid"]:
        raise HTTPException(status_code=403, detail="Not your internship")
    return internship


@router.get("/profile", response_model=CompanyResponse)
async def get_profile(company: dict = Depends(get_current_company)):
    profile = CompanyProfileService().get(company["uid"])
    if not profile:
        raise HTTPException(status_code=404, detail="Company profile not found")
    return CompanyResponse(**profile)


@router.put("/profile", response_model=CompanyResponse)
async def update_profile(data: CompanyUpdate, company: dict = Depends(get_current_company)):
    """Update company profile. Only provided fields are updated."""
    fields = data.model_dump(exclude_none=True)
    if not fields:
        raise HTTPException(status_code=400, detail="No fields to update")

    profile = CompanyProfileService().update_profile(company["uid"], fields)
    if not profile:
        raise HTTPException(status_code=404, detail="Company profile not found")
    return CompanyResponse(**profile)


@router.get("/internships", response_model=List[InternshipResponse])
async def get_company_internships(company: dict = Depends(get_current_company)):
    """All internships posted by this company, newest first."""
    internships = InternshipService().list(company_id=company["uid"])
    return [InternshipResponse(**i) for i in internships]


@router.get("/internships/{internship_id}/applicants", response_model=List[ApplicantResponse])
async def get_applicants(internship_id: str, company: dict = Depends(get_current_company)):
    """
    Applicants for one internship, highest stored match score first.

    Candidates with blind hiring enabled are shown anonymised.
    """
    internship = _owned_internship(internship_id, company)

    applications = ApplicationRecordService().list_by_internship(internship_id)
    student_ids = [a["student_id"] for a in applications]
    profiles = StudentProfileService().get_many(student_ids)
    users = get_users_by_uid(student_ids)

    applicants = []
    for application in sorted(applications, key=lambda a: a.get("match_score", 0), reverse=True):
        profile = profiles.get(application["student_id"], {"uid": application["student_id"]})
        candidate = public_candidate_view(profile, users.get(application["student_id"]))
        applicants.append(ApplicantResponse(
            application=ApplicationResponse(
                **application,
                internship_role=internship.get("role"),
                company_name=internship.get("company_name")
            ),
            candidate=CandidateResponse(**candidate)
        ))
    return applicants


@router.put("/applications/{application_id}/status", response_model=ApplicationResponse)
async def update_application_status(
    application_id: str,
    data: ApplicationStatusUpdate,
    company: dict = Depends(get_current_company)
):
    """
    Move an application forward.

    Selected/Rejected are final and email the student.
    """
    application = ApplicationRecordService().get(application_id)
    if not application:
        raise HTTPException(status_code=404, detail="Application not found")

    internship = _owned_internship(application["internship_id"], company)
    profile = CompanyProfileService().get(company["uid"]) or {"company_name": company["name"]}

    try:
        updated = get_application_workflow().decide(
            application,
            data.status.value,
            company=profile,
            internship=internship,
            student_user=get_user_by_uid(application["student_id"])
        )
    except InvalidStatusTransition as e:
        raise HTTPException(status_code=400, detail=str(e))
    except StatusConflict:
        raise HTTPException(status_code=409, detail="Application status changed, reload and try again")

    return ApplicationResponse(
        **updated,
        internship_role=internship.get("role"),
        company_name=internship.get("company_name")
    )
