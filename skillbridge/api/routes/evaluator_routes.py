"""
Evaluator Routes

GET /evaluators/profile - Get own profile
PUT /evaluators/profile - Update expertise/bio
GET /evaluators/queue - Applications awaiting evaluation (anonymised)
PUT /evaluators/applications/{id}/review - Mark application Under Review
POST /evaluators/applications/{id}/evaluate - Submit score and notes
"""

from fastapi import APIRouter, HTTPException, Depends
from typing import List

from skillbridge.core.auth import get_current_evaluator
from skillbridge.services.application_service import (
    PENDING_REVIEW_STATUSES, InvalidStatusTransition, StatusConflict, get_application_workflow
)
from skillbridge.services.mongo_service import (
    EvaluatorProfileService, InternshipService, StudentProfileService, ApplicationRecordService
)
from skillbridge.services.profile_service import public_candidate_view
from skillbridge.schemas.schemas import (
    EvaluatorUpdate, EvaluatorResponse, EvaluationSubmit, ApplicantResponse,
    ApplicationResponse, CandidateResponse
)

router = APIRouter(prefix="/evaluators", tags=["Evaluators"])


def _load_application(application_id: str) -> dict:
    application = ApplicationRecordService().get(application_id)
    if not application:
        raise HTTPException(status_code=404, detail="Application not found")
    return application


def _with_internship(application: dict) -> ApplicationResponse:
    internship = InternshipService().get(application["internship_id"]) or {}
    return ApplicationResponse(
        **application,
        internship_role=internship.get("role"),
        company_name=internship.get("company_name")
    )


@router.get("/profile", response_model=EvaluatorResponse)
async def get_profile(evaluator: dict = Depends(get_current_evaluator)):
    profile = EvaluatorProfileService().get(evaluator["uid"])
    if not profile:
        raise HTTPException(status_code=404, detail="Evaluator profile not found")
    return EvaluatorResponse(**profile)


@router.put("/profile", response_model=EvaluatorResponse)
async def update_profile(data: EvaluatorUpdate, evaluator: dict = Depends(get_current_evaluator)):
    fields = data.model_dump(exclude_none=True)
    if not fields:
        raise HTTPException(status_code=400, detail="No fields to update")

    profile = EvaluatorProfileService().update_profile(evaluator["uid"], fields)
    if not profile:
        raise HTTPException(status_code=404, detail="Evaluator profile not found")
    return EvaluatorResponse(**profile)


@router.get("/queue", response_model=List[ApplicantResponse])
async def get_queue(evaluator: dict = Depends(get_current_evaluator)):
    """
    Applications in Applied or Under Review, newest first.

    Evaluators always see candidates anonymised.
    """
    applications = ApplicationRecordService().list_by_status(PENDING_REVIEW_STATUSES)
    profiles = StudentProfileService().get_many(a["student_id"] for a in applications)
    internships = InternshipService().get_many(a["internship_id"] for a in applications)

    queue = []
    for application in applications:
        internship = internships.get(application["internship_id"], {})
        profile = profiles.get(application["student_id"], {"uid": application["student_id"]})
        queue.append(ApplicantResponse(
            application=ApplicationResponse(
                **application,
                internship_role=internship.get("role"),
                company_name=internship.get("company_name")
            ),
            candidate=CandidateResponse(**public_candidate_view(profile, force_anonymous=True))
        ))
    return queue


@router.put("/applications/{application_id}/review", response_model=ApplicationResponse)
async def start_review(application_id: str, evaluator: dict = Depends(get_current_evaluator)):
    application = _load_application(application_id)
    try:
        updated = get_application_workflow().start_review(application, evaluator["role"])
    except InvalidStatusTransition as e:
        raise HTTPException(status_code=400, detail=str(e))
    except StatusConflict:
        raise HTTPException(status_code=409, detail="Application status changed, reload and try again")
    return _with_internship(updated)


@router.post("/applications/{application_id}/evaluate", response_model=ApplicationResponse)
async def evaluate_application(
    application_id: str,
    evaluation: EvaluationSubmit,
    evaluator: dict = Depends(get_current_evaluator)
):
    """Score the candidate 1-10 and move the application to Evaluated."""
    application = _load_application(application_id)
    try:
        updated = get_application_workflow().submit_evaluation(
            application,
            evaluator_id=evaluator["uid"],
            score=evaluation.score,
            notes=evaluation.notes
        )
    except InvalidStatusTransition as e:
        raise HTTPException(status_code=400, detail=str(e))
    except StatusConflict:
        raise HTTPException(status_code=409, detail="Application status changed, reload and try again")
    return _with_internship(updated)
