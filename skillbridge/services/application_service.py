"""
Application Service - apply flow and status lifecycle.

LIFECYCLE:
    Applied -> Under Review -> Evaluated -> Selected | Rejected

- Evaluators move Applied/Under Review forward to Under Review or Evaluated
- Companies move any non-terminal application to Under Review (from
  Applied only), Selected or Rejected
- Selected and Rejected are terminal

The match snapshot (score + reasons) is computed once, at apply time, with
the browse weights, and stored on the application for good.
"""

import logging
from typing import Dict, Optional, Set

from pymongo.errors import DuplicateKeyError

from skillbridge.models.matching import CandidateProfile, OpportunityPosting
from skillbridge.schemas.schemas import ApplicationStatus, UserRole
from skillbridge.services.matching_service import get_browse_scorer
from skillbridge.services.mongo_service import (
    ApplicationRecordService,
    EvaluatorProfileService,
    InternshipService,
    utcnow
)
from skillbridge.services.notification_service import (
    NotificationError,
    NotificationService,
    get_notification_service
)

logger = logging.getLogger(__name__)

APPLIED = ApplicationStatus.applied.value
UNDER_REVIEW = ApplicationStatus.under_review.value
EVALUATED = ApplicationStatus.evaluated.value
SELECTED = ApplicationStatus.selected.value
REJECTED = ApplicationStatus.rejected.value

TERMINAL_STATUSES = {SELECTED, REJECTED}
PENDING_REVIEW_STATUSES = [APPLIED, UNDER_REVIEW]

TRANSITIONS: Dict[str, Dict[str, Set[str]]] = {
    UserRole.evaluator.value: {
        APPLIED: {UNDER_REVIEW, EVALUATED},
        UNDER_REVIEW: {EVALUATED},
    },
    UserRole.company.value: {
        APPLIED: {UNDER_REVIEW, SELECTED, REJECTED},
        UNDER_REVIEW: {SELECTED, REJECTED},
        EVALUATED: {SELECTED, REJECTED},
    },
}


# ============================================================
# ERRORS
# ============================================================

class AlreadyApplied(Exception):
    pass


class InvalidStatusTransition(Exception):
    def __init__(self, current: str, target: str, role: str):
        self.current = current
        self.target = target
        self.role = role
        super().__init__(f"A {role} cannot move an application from '{current}' to '{target}'")


class StatusConflict(Exception):
    """The application changed status between read and write."""


# ============================================================
# LIFECYCLE RULES
# ============================================================

def allowed_transitions(current: str, role: str) -> Set[str]:
    return set(TRANSITIONS.get(role, {}).get(current, set()))


def validate_transition(current: str, target: str, role: str) -> None:
    if target not in allowed_transitions(current, role):
        raise InvalidStatusTransition(current, target, role)


# ============================================================
# WORKFLOW
# ============================================================

class ApplicationWorkflow:
    """
    Orchestrates applications across the document store, the scorer and
    the notification sender.
    """

    def __init__(self, notifier: Optional[NotificationService] = None):
        self.records = ApplicationRecordService()
        self.internships = InternshipService()
        self.evaluators = EvaluatorProfileService()
        self.scorer = get_browse_scorer()
        self.notifier = notifier or get_notification_service()

    def apply(self, student: dict, internship: dict) -> dict:
        """
        Create an application with the match snapshot and register the
        student as applicant.

        Raises:
            AlreadyApplied: the student already applied to this internship
        """
        student_id = student["uid"]
        internship_id = internship["id"]

        if self.records.find(student_id, internship_id):
            raise AlreadyApplied()

        result = self.scorer.score(
            CandidateProfile.from_document(student),
            OpportunityPosting.from_document(internship)
        )
        now = utcnow()
        doc = {
            "student_id": student_id,
            "internship_id": internship_id,
            **result.snapshot(),
            "status": APPLIED,
            "applied_at": now,
            "updated_at": now
        }

        try:
            application = self.records.insert(doc)
        except DuplicateKeyError:
            raise AlreadyApplied()

        self.internships.add_applicant(internship_id, student_id)
        logger.info(
            "Student %s applied to internship %s (match %d)",
            student_id, internship_id, result.score
        )
        return application

    def change_status(
        self,
        application: dict,
        target: str,
        role: str,
        extra: Optional[dict] = None
    ) -> dict:
        """
        Validate and persist a status change (compare-and-set).

        Raises:
            InvalidStatusTransition: not allowed for this role/state
            StatusConflict: someone else changed the status first
        """
        current = application["status"]
        validate_transition(current, target, role)

        if not self.records.update_status(application["id"], current, target, extra):
            raise StatusConflict(f"Application {application['id']} is no longer '{current}'")

        logger.info("Application %s: %s -> %s by %s", application["id"], current, target, role)
        return self.records.get(application["id"])

    def start_review(self, application: dict, role: str) -> dict:
        return self.change_status(application, UNDER_REVIEW, role)

    def submit_evaluation(
        self,
        application: dict,
        evaluator_id: str,
        score: int,
        notes: Optional[str]
    ) -> dict:
        updated = self.change_status(application, EVALUATED, UserRole.evaluator.value, {
            "evaluator_id": evaluator_id,
            "evaluator_score": score,
            "evaluator_notes": notes or ""
        })
        self.evaluators.increment_completed(evaluator_id)
        return updated

    def decide(
        self,
        application: dict,
        target: str,
        company: dict,
        internship: dict,
        student_user: Optional[dict]
    ) -> dict:
        """
        Company status change. Selected/Rejected notify the student by
        email; a failed email does not undo the status change.
        """
        updated = self.change_status(application, target, UserRole.company.value)

        if target in TERMINAL_STATUSES:
            self._notify_decision(updated, target, company, internship, student_user)

        return updated

    def _notify_decision(self, application, status, company, internship, student_user) -> None:
        if not student_user or not student_user.get("email"):
            logger.warning("No email on file for student %s, skipping status email", application["student_id"])
            return
        try:
            self.notifier.send_status_email(
                to_email=student_user["email"],
                user_name=student_user.get("name") or "Student",
                company_name=company.get("company_name") or "Company",
                internship_role=internship.get("role") or "Internship",
                application_id=application["id"],
                status=status
            )
        except NotificationError as e:
            logger.warning("Status email for application %s failed: %s", application["id"], e)


def get_application_workflow() -> ApplicationWorkflow:
    """Get application workflow instance."""
    return ApplicationWorkflow()
