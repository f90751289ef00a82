"""
Pydantic Schemas - Request/Response Validation

All API request and response schemas in one file for simplicity.
"""

from pydantic import BaseModel, EmailStr, Field, field_validator
from typing import Optional, List
from datetime import datetime
from enum import Enum

from skillbridge.models.matching import clean_skills


# ============================================================
# ENUMS
# ============================================================

class UserRole(str, Enum):
    student = "student"
    company = "company"
    evaluator = "evaluator"


class InternshipType(str, Enum):
    remote = "Remote"
    hybrid = "Hybrid"
    on_site = "On-site"


class Difficulty(str, Enum):
    beginner = "Beginner"
    intermediate = "Intermediate"
    advanced = "Advanced"


class ApplicationStatus(str, Enum):
    applied = "Applied"
    under_review = "Under Review"
    evaluated = "Evaluated"
    selected = "Selected"
    rejected = "Rejected"


# ============================================================
# AUTH SCHEMAS
# ============================================================

class SignupRequest(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=8)
    name: str = Field(..., min_length=2, max_length=100)
    role: UserRole

class LoginRequest(BaseModel):
    email: EmailStr
    password: str

class TokenResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    uid: str
    role: str

class UserResponse(BaseModel):
    uid: str
    email: str
    name: str
    role: str
    is_active: bool
    created_at: datetime


# ============================================================
# STUDENT SCHEMAS
# ============================================================

class ProjectCreate(BaseModel):
    title: str = Field(..., min_length=1, max_length=200)
    description: str = ""
    skills: List[str] = []
    github_link: Optional[str] = None
    deployed_link: Optional[str] = None

    @field_validator("title")
    @classmethod
    def strip_title(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("Project name is required")
        return value

    @field_validator("skills", mode="before")
    @classmethod
    def normalize_skills(cls, value):
        return clean_skills(value)

class Project(ProjectCreate):
    id: str

class CertificationCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=200)
    issuer: str = Field(..., min_length=1, max_length=200)
    date: str
    verification_url: Optional[str] = None

class Certification(CertificationCreate):
    id: str

class StudentUpdate(BaseModel):
    bio: Optional[str] = None
    college: Optional[str] = None
    location: Optional[str] = None
    blind_hiring_enabled: Optional[bool] = None
    video_intro_url: Optional[str] = None

class SkillAdd(BaseModel):
    skill_name: str = Field(..., min_length=1, max_length=100)

class LinksUpdate(BaseModel):
    resume_url: Optional[str] = None
    portfolio_url: Optional[str] = None

class StudentResponse(BaseModel):
    uid: str
    skills: List[str] = []
    projects: List[Project] = []
    certifications: List[Certification] = []
    readiness_score: int = 0
    profile_completion: int = 10
    blind_hiring_enabled: bool = True
    bio: Optional[str] = None
    college: Optional[str] = None
    location: Optional[str] = None
    resume_url: Optional[str] = None
    portfolio_url: Optional[str] = None
    video_intro_url: Optional[str] = None

class CandidateResponse(BaseModel):
    """Student as seen by companies/evaluators (blind hiring applied)."""
    uid: str
    name: Optional[str] = None
    college: Optional[str] = None
    anonymous: bool
    bio: Optional[str] = None
    location: Optional[str] = None
    skills: List[str] = []
    projects: List[Project] = []
    certifications: List[Certification] = []
    readiness_score: int = 0
    profile_completion: int = 0
    resume_url: Optional[str] = None
    portfolio_url: Optional[str] = None


# ============================================================
# COMPANY SCHEMAS
# ============================================================

class CompanyUpdate(BaseModel):
    company_name: Optional[str] = Field(None, min_length=2, max_length=200)
    industry: Optional[str] = None
    location: Optional[str] = None
    website: Optional[str] = None
    description: Optional[str] = None
    logo: Optional[str] = None

class CompanyResponse(BaseModel):
    uid: str
    company_name: str
    verified: bool = False
    internships_posted: List[str] = []
    industry: Optional[str] = None
    location: Optional[str] = None
    website: Optional[str] = None
    description: Optional[str] = None
    logo: Optional[str] = None


# ============================================================
# EVALUATOR SCHEMAS
# ============================================================

class EvaluatorUpdate(BaseModel):
    expertise: Optional[List[str]] = None
    bio: Optional[str] = None

    @field_validator("expertise", mode="before")
    @classmethod
    def normalize_expertise(cls, value):
        return None if value is None else clean_skills(value)

class EvaluatorResponse(BaseModel):
    uid: str
    expertise: List[str] = []
    ratings: float = 0
    evaluations_completed: int = 0
    bio: Optional[str] = None

class EvaluationSubmit(BaseModel):
    score: int = Field(..., ge=1, le=10)
    notes: Optional[str] = None


# ============================================================
# INTERNSHIP SCHEMAS
# ============================================================

class InternshipCreate(BaseModel):
    role: str = Field(..., min_length=2, max_length=200)
    description: str = ""
    required_skills: List[str]
    difficulty: Difficulty = Difficulty.beginner
    type: InternshipType = InternshipType.remote
    duration: str = ""
    stipend: Optional[str] = None
    location: Optional[str] = None
    deadline: Optional[str] = None

    @field_validator("required_skills", mode="before")
    @classmethod
    def require_skills(cls, value):
        skills = clean_skills(value)
        if not skills:
            raise ValueError("Please add at least one required skill")
        return skills

class InternshipUpdate(BaseModel):
    role: Optional[str] = Field(None, min_length=2, max_length=200)
    description: Optional[str] = None
    required_skills: Optional[List[str]] = None
    difficulty: Optional[Difficulty] = None
    type: Optional[InternshipType] = None
    duration: Optional[str] = None
    stipend: Optional[str] = None
    location: Optional[str] = None
    deadline: Optional[str] = None

    @field_validator("required_skills", mode="before")
    @classmethod
    def require_skills(cls, value):
        if value is None:
            return None
        skills = clean_skills(value)
        if not skills:
            raise ValueError("Please add at least one required skill")
        return skills

class InternshipResponse(BaseModel):
    id: str
    company_id: str
    company_name: str
    role: str
    description: str = ""
    required_skills: List[str] = []
    difficulty: str
    type: str
    duration: str = ""
    stipend: Optional[str] = None
    location: Optional[str] = None
    deadline: Optional[str] = None
    applicants: List[str] = []
    created_at: datetime


# ============================================================
# MATCHING SCHEMAS
# ============================================================

class MatchResultResponse(BaseModel):
    score: int
    reasons: List[str] = []
    matched_skills: List[str] = []

class InternshipMatchResponse(BaseModel):
    internship: InternshipResponse
    match: MatchResultResponse
    already_applied: bool = False

class RecommendationResponse(BaseModel):
    internship_id: str
    role: str
    company_name: str
    location: Optional[str] = None
    type: Optional[str] = None
    difficulty: Optional[str] = None
    match_score: int
    matched_skills: List[str] = []

class RecommendationListResponse(BaseModel):
    recommendations: List[RecommendationResponse]
    total: int


# ============================================================
# APPLICATION SCHEMAS
# ============================================================

class ApplicationStatusUpdate(BaseModel):
    status: ApplicationStatus

class ApplicationResponse(BaseModel):
    id: str
    student_id: str
    internship_id: str
    match_score: int
    match_reasons: List[str] = []
    status: ApplicationStatus
    applied_at: datetime
    updated_at: Optional[datetime] = None
    evaluator_notes: Optional[str] = None
    evaluator_score: Optional[int] = None
    internship_role: Optional[str] = None
    company_name: Optional[str] = None

class ApplicantResponse(BaseModel):
    application: ApplicationResponse
    candidate: CandidateResponse


# ============================================================
# CHAT SCHEMAS
# ============================================================

class ChatRequest(BaseModel):
    message: str = Field(..., min_length=1, max_length=2000)

class ChatResponse(BaseModel):
    reply: str
    topic: str
    timestamp: datetime


# ============================================================
# GENERIC SCHEMAS
# ============================================================

class MessageResponse(BaseModel):
    message: str
    success: bool = True
