"""
Student Routes

GET /students/profile - Get own profile
PUT /students/profile - Update bio, college, location, blind hiring
POST /students/skills - Add skill
DELETE /students/skills/{skill_name} - Remove skill
POST /students/projects - Add project
PUT /students/projects/{project_id} - Replace project
DELETE /students/projects/{project_id} - Remove project
POST /students/certifications - Add certification
DELETE /students/certifications/{certification_id} - Remove certification
PUT /students/links - Set resume and portfolio links
GET /students/applications - Get my applications
GET /students/{uid} - Candidate view for companies/evaluators
"""

from fastapi import APIRouter, HTTPException, Depends
from typing import List

from skillbridge.core.auth import get_current_student, get_current_reviewer, get_user_by_uid
from skillbridge.services.mongo_service import (
    StudentProfileService, ApplicationRecordService, InternshipService
)
from skillbridge.services.profile_service import public_candidate_view
from skillbridge.schemas.schemas import (
    StudentUpdate, StudentResponse, SkillAdd, ProjectCreate, Project,
    CertificationCreate, Certification, LinksUpdate, ApplicationResponse,
    CandidateResponse, MessageResponse
)

router = APIRouter(prefix="/students", tags=["Students"])


def _load_profile(uid: str) -> dict:
    profile = StudentProfileService().get(uid)
    if not profile:
        raise HTTPException(status_code=404, detail="Student profile not found")
    return profile


@router.get("/profile", response_model=StudentResponse)
async def get_profile(student: dict = Depends(get_current_student)):
    """Get current student's profile with computed completion/readiness."""
    return StudentResponse(**_load_profile(student["uid"]))


@router.put("/profile", response_model=StudentResponse)
async def update_profile(data: StudentUpdate, student: dict = Depends(get_current_student)):
    """Update student profile. Only provided fields are updated."""
    fields = data.model_dump(exclude_none=True)
    if not fields:
        raise HTTPException(status_code=400, detail="No fields to update")

    for key in ("bio", "college", "location"):
        if key in fields:
            fields[key] = fields[key].strip()

    profile = StudentProfileService().update_profile(student["uid"], fields)
    if not profile:
        raise HTTPException(status_code=404, detail="Student profile not found")
    return StudentResponse(**profile)


@router.post("/skills", response_model=MessageResponse, status_code=201)
async def add_skill(skill: SkillAdd, student: dict = Depends(get_current_student)):
    """Add a skill to profile. Duplicates (any case) are rejected."""
    name = skill.skill_name.strip()
    if not name:
        raise HTTPException(status_code=400, detail="Skill name is required")

    _load_profile(student["uid"])
    if not StudentProfileService().add_skill(student["uid"], name):
        raise HTTPException(status_code=400, detail="Skill already added")

    return MessageResponse(message=f"Skill '{name}' added")


@router.delete("/skills/{skill_name}", response_model=MessageResponse)
async def remove_skill(skill_name: str, student: dict = Depends(get_current_student)):
    """Remove a skill from profile."""
    if not StudentProfileService().remove_skill(student["uid"], skill_name):
        raise HTTPException(status_code=404, detail="Skill not found in profile")

    return MessageResponse(message="Skill removed")


@router.post("/projects", response_model=Project, status_code=201)
async def add_project(project: ProjectCreate, student: dict = Depends(get_current_student)):
    _load_profile(student["uid"])
    created = StudentProfileService().add_project(student["uid"], project.model_dump())
    return Project(**created)


@router.put("/projects/{project_id}", response_model=Project)
async def update_project(project_id: str, project: ProjectCreate, student: dict = Depends(get_current_student)):
    if not StudentProfileService().update_project(student["uid"], project_id, project.model_dump()):
        raise HTTPException(status_code=404, detail="Project not found")
    return Project(id=project_id, **project.model_dump())


@router.delete("/projects/{project_id}", response_model=MessageResponse)
async def remove_project(project_id: str, student: dict = Depends(get_current_student)):
    if not StudentProfileService().remove_project(student["uid"], project_id):
        raise HTTPException(status_code=404, detail="Project not found")
    return MessageResponse(message="Project removed")


@router.post("/certifications", response_model=Certification, status_code=201)
async def add_certification(certification: CertificationCreate, student: dict = Depends(get_current_student)):
    _load_profile(student["uid"])
    created = StudentProfileService().add_certification(student["uid"], certification.model_dump())
    return Certification(**created)


@router.delete("/certifications/{certification_id}", response_model=MessageResponse)
async def remove_certification(certification_id: str, student: dict = Depends(get_current_student)):
    if not StudentProfileService().remove_certification(student["uid"], certification_id):
        raise HTTPException(status_code=404, detail="Certification not found")
    return MessageResponse(message="Certification removed")


@router.put("/links", response_model=StudentResponse)
async def update_links(links: LinksUpdate, student: dict = Depends(get_current_student)):
    """Set resume/portfolio URLs. An empty string clears a link."""
    fields = {k: v.strip() for k, v in links.model_dump(exclude_none=True).items()}
    profile = StudentProfileService().update_profile(student["uid"], fields)
    if not profile:
        raise HTTPException(status_code=404, detail="Student profile not found")
    return StudentResponse(**profile)


@router.get("/applications", response_model=List[ApplicationResponse])
async def get_my_applications(student: dict = Depends(get_current_student)):
    """All applications of the current student, newest first."""
    applications = ApplicationRecordService().list_by_student(student["uid"])
    internships = InternshipService().get_many(a["internship_id"] for a in applications)

    responses = []
    for application in applications:
        internship = internships.get(application["internship_id"], {})
        responses.append(ApplicationResponse(
            **application,
            internship_role=internship.get("role"),
            company_name=internship.get("company_name")
        ))
    return responses


@router.get("/{uid}", response_model=CandidateResponse)
async def get_candidate(uid: str, reviewer: dict = Depends(get_current_reviewer)):
    """
    Student profile as shown to reviewers.

    Companies see name/college unless the student enabled blind hiring;
    evaluators never do.
    """
    profile = _load_profile(uid)
    view = public_candidate_view(
        profile,
        get_user_by_uid(uid),
        force_anonymous=reviewer["role"] == "evaluator"
    )
    return CandidateResponse(**view)
