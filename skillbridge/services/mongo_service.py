"""
MongoDB Service - CRUD operations for document collections.

Collections in this database:
1. students      - Student profiles (skills, projects, certifications, scores)
2. companies     - Company profiles
3. evaluators    - Evaluator profiles and counters
4. internships   - Internship postings with applicant uid list
5. applications  - Applications with the match snapshot taken at apply time

Profiles are keyed by the identity uid (field "uid"); internships and
applications use ObjectId and are exposed as "id" strings.
"""

import re
import uuid
from datetime import datetime, timezone
from typing import Optional, List, Dict, Iterable

from bson import ObjectId
from pymongo import DESCENDING
from pymongo.collection import Collection

from skillbridge.db.mongodb import get_collection, COLLECTIONS
from skillbridge.services.profile_service import with_computed_scores


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


# ============================================================
# HELPER: Convert ObjectId to string for JSON serialization
# ============================================================

def serialize_doc(doc: Optional[dict]) -> Optional[dict]:
    """Expose the ObjectId as an "id" string."""
    if doc is None:
        return None
    if "_id" in doc:
        doc["id"] = str(doc.pop("_id"))
    return doc


def serialize_docs(docs: Iterable[dict]) -> list:
    return [serialize_doc(doc) for doc in docs]


def serialize_profile(doc: Optional[dict]) -> Optional[dict]:
    """Profiles are addressed by uid; the internal _id is dropped."""
    if doc is None:
        return None
    doc.pop("_id", None)
    return doc


def to_object_id(value: str) -> Optional[ObjectId]:
    if not value or not ObjectId.is_valid(value):
        return None
    return ObjectId(value)


def new_item_id() -> str:
    """Id for items embedded in a profile (projects, certifications)."""
    return uuid.uuid4().hex


# ============================================================
# STUDENTS COLLECTION
# ============================================================

class StudentProfileService:
    """
    Student profile documents.
    Every mutation recomputes profile_completion and readiness_score.

    Mutations bump "revision"; computed scores are only written if the
    revision is still the one they were computed from, so a slow refresh
    never overwrites a newer one. "skill_keys" holds the lowercased skills
    for the atomic duplicate check.
    """

    def __init__(self):
        self.collection: Collection = get_collection(COLLECTIONS["students"])

    def create_default(self, uid: str) -> dict:
        doc = {
            "uid": uid,
            "skills": [],
            "skill_keys": [],
            "projects": [],
            "certifications": [],
            "readiness_score": 0,
            "profile_completion": 10,
            "blind_hiring_enabled": True,
            "revision": 0,
            "created_at": utcnow()
        }
        self.collection.insert_one(doc)
        return serialize_profile(doc)

    def get(self, uid: str) -> Optional[dict]:
        return serialize_profile(self.collection.find_one({"uid": uid}))

    def get_many(self, uids: Iterable[str]) -> Dict[str, dict]:
        cursor = self.collection.find({"uid": {"$in": list(uids)}})
        return {doc["uid"]: serialize_profile(doc) for doc in cursor}

    def _mutate(self, query: dict, update: dict) -> bool:
        """Apply an update and bump the revision. True if a document matched."""
        update = dict(update)
        update["$inc"] = dict(update.get("$inc", {}), revision=1)
        return self.collection.update_one(query, update).matched_count > 0

    def _store_scores(self, doc: dict) -> bool:
        """Write scores computed from doc unless the profile changed since."""
        scores = with_computed_scores(doc)
        result = self.collection.update_one(
            {"uid": doc["uid"], "revision": doc.get("revision")},
            {"$set": scores}
        )
        doc.update(scores)
        return result.matched_count > 0

    def _refresh_scores(self, uid: str) -> Optional[dict]:
        doc = self.get(uid)
        if doc is None:
            return None
        self._store_scores(doc)
        return doc

    def update_profile(self, uid: str, fields: dict) -> Optional[dict]:
        """Set plain profile fields, then recompute scores."""
        if fields:
            self._mutate({"uid": uid}, {"$set": dict(fields, updated_at=utcnow())})
        return self._refresh_scores(uid)

    def add_skill(self, uid: str, skill: str) -> bool:
        """
        Append a skill. Returns False when it is already present (any case)
        or the profile does not exist.
        """
        key = skill.lower()
        added = self._mutate(
            {"uid": uid, "skill_keys": {"$ne": key}},
            {"$push": {"skills": skill, "skill_keys": key}}
        )
        if added:
            self._refresh_scores(uid)
        return added

    def remove_skill(self, uid: str, skill: str) -> bool:
        doc = self.get(uid)
        if doc is None:
            return False
        key = skill.lower()
        stored = [s for s in doc.get("skills", []) if s.lower() == key]
        if not stored:
            return False
        self._mutate({"uid": uid}, {"$pullAll": {"skills": stored, "skill_keys": [key]}})
        self._refresh_scores(uid)
        return True

    def add_project(self, uid: str, project: dict) -> dict:
        project = dict(project, id=new_item_id())
        self._mutate({"uid": uid}, {"$push": {"projects": project}})
        self._refresh_scores(uid)
        return project

    def update_project(self, uid: str, project_id: str, project: dict) -> bool:
        project = dict(project, id=project_id)
        if not self._mutate(
            {"uid": uid, "projects.id": project_id},
            {"$set": {"projects.$": project}}
        ):
            return False
        self._refresh_scores(uid)
        return True

    def remove_project(self, uid: str, project_id: str) -> bool:
        if not self._mutate(
            {"uid": uid, "projects.id": project_id},
            {"$pull": {"projects": {"id": project_id}}}
        ):
            return False
        self._refresh_scores(uid)
        return True

    def add_certification(self, uid: str, certification: dict) -> dict:
        certification = dict(certification, id=new_item_id())
        self._mutate({"uid": uid}, {"$push": {"certifications": certification}})
        self._refresh_scores(uid)
        return certification

    def remove_certification(self, uid: str, certification_id: str) -> bool:
        if not self._mutate(
            {"uid": uid, "certifications.id": certification_id},
            {"$pull": {"certifications": {"id": certification_id}}}
        ):
            return False
        self._refresh_scores(uid)
        return True


# ============================================================
# COMPANIES COLLECTION
# ============================================================

class CompanyProfileService:

    def __init__(self):
        self.collection: Collection = get_collection(COLLECTIONS["companies"])

    def create_default(self, uid: str, company_name: str) -> dict:
        doc = {
            "uid": uid,
            "company_name": company_name,
            "verified": False,
            "internships_posted": [],
            "created_at": utcnow()
        }
        self.collection.insert_one(doc)
        return serialize_profile(doc)

    def get(self, uid: str) -> Optional[dict]:
        return serialize_profile(self.collection.find_one({"uid": uid}))

    def update_profile(self, uid: str, fields: dict) -> Optional[dict]:
        if fields:
            fields = dict(fields, updated_at=utcnow())
            self.collection.update_one({"uid": uid}, {"$set": fields})
        return self.get(uid)

    def add_internship(self, uid: str, internship_id: str) -> None:
        self.collection.update_one({"uid": uid}, {"$addToSet": {"internships_posted": internship_id}})

    def remove_internship(self, uid: str, internship_id: str) -> None:
        self.collection.update_one({"uid": uid}, {"$pull": {"internships_posted": internship_id}})


# ============================================================
# EVALUATORS COLLECTION
# ============================================================

class EvaluatorProfileService:

    def __init__(self):
        self.collection: Collection = get_collection(COLLECTIONS["evaluators"])

    def create_default(self, uid: str) -> dict:
        doc = {
            "uid": uid,
            "expertise": [],
            "ratings": 0,
            "evaluations_completed": 0,
            "created_at": utcnow()
        }
        self.collection.insert_one(doc)
        return serialize_profile(doc)

    def get(self, uid: str) -> Optional[dict]:
        return serialize_profile(self.collection.find_one({"uid": uid}))

    def update_profile(self, uid: str, fields: dict) -> Optional[dict]:
        if fields:
            fields = dict(fields, updated_at=utcnow())
            self.collection.update_one({"uid": uid}, {"$set": fields})
        return self.get(uid)

    def increment_completed(self, uid: str) -> None:
        """Atomic counter bump after an evaluation is submitted."""
        self.collection.update_one({"uid": uid}, {"$inc": {"evaluations_completed": 1}})


# ============================================================
# INTERNSHIPS COLLECTION
# ============================================================

class InternshipService:

    def __init__(self):
        self.collection: Collection = get_collection(COLLECTIONS["internships"])

    def insert(self, company_id: str, company_name: str, data: dict) -> dict:
        doc = dict(
            data,
            company_id=company_id,
            company_name=company_name,
            applicants=[],
            created_at=utcnow()
        )
        result = self.collection.insert_one(doc)
        doc["_id"] = result.inserted_id
        return serialize_doc(doc)

    def get(self, internship_id: str) -> Optional[dict]:
        oid = to_object_id(internship_id)
        if oid is None:
            return None
        return serialize_doc(self.collection.find_one({"_id": oid}))

    def get_many(self, internship_ids: Iterable[str]) -> Dict[str, dict]:
        oids = [oid for oid in (to_object_id(i) for i in internship_ids) if oid]
        cursor = self.collection.find({"_id": {"$in": oids}})
        return {doc["id"]: doc for doc in serialize_docs(cursor)}

    def list(
        self,
        search: Optional[str] = None,
        internship_type: Optional[str] = None,
        difficulty: Optional[str] = None,
        company_id: Optional[str] = None
    ) -> List[dict]:
        """
        Newest first, optionally filtered.

        search matches role, company name, description or any required skill.
        """
        query = {}
        if search:
            pattern = {"$regex": re.escape(search.strip()), "$options": "i"}
            query["$or"] = [
                {"role": pattern},
                {"company_name": pattern},
                {"description": pattern},
                {"required_skills": pattern}
            ]
        if internship_type:
            query["type"] = internship_type
        if difficulty:
            query["difficulty"] = difficulty
        if company_id:
            query["company_id"] = company_id

        cursor = self.collection.find(query).sort("created_at", DESCENDING)
        return serialize_docs(cursor)

    def update(self, internship_id: str, company_id: str, fields: dict) -> bool:
        """Owner-only update. Returns False if not found or not owned."""
        oid = to_object_id(internship_id)
        if oid is None:
            return False
        result = self.collection.update_one(
            {"_id": oid, "company_id": company_id},
            {"$set": dict(fields, updated_at=utcnow())}
        )
        return result.matched_count > 0

    def delete(self, internship_id: str, company_id: str) -> bool:
        oid = to_object_id(internship_id)
        if oid is None:
            return False
        result = self.collection.delete_one({"_id": oid, "company_id": company_id})
        return result.deleted_count > 0

    def add_applicant(self, internship_id: str, student_id: str) -> None:
        """$addToSet keeps concurrent applies from dropping each other."""
        self.collection.update_one(
            {"_id": to_object_id(internship_id)},
            {"$addToSet": {"applicants": student_id}}
        )


# ============================================================
# APPLICATIONS COLLECTION
# ============================================================

class ApplicationRecordService:
    """
    Application documents. match_score/match_reasons are written once at
    insert and never updated.
    """

    def __init__(self):
        self.collection: Collection = get_collection(COLLECTIONS["applications"])

    def insert(self, doc: dict) -> dict:
        """Raises pymongo.errors.DuplicateKeyError on a second application."""
        doc = dict(doc)
        result = self.collection.insert_one(doc)
        doc["_id"] = result.inserted_id
        return serialize_doc(doc)

    def get(self, application_id: str) -> Optional[dict]:
        oid = to_object_id(application_id)
        if oid is None:
            return None
        return serialize_doc(self.collection.find_one({"_id": oid}))

    def find(self, student_id: str, internship_id: str) -> Optional[dict]:
        return serialize_doc(self.collection.find_one({
            "student_id": student_id,
            "internship_id": internship_id
        }))

    def list_by_student(self, student_id: str) -> List[dict]:
        cursor = self.collection.find({"student_id": student_id}).sort("applied_at", DESCENDING)
        return serialize_docs(cursor)

    def list_by_internship(self, internship_id: str) -> List[dict]:
        cursor = self.collection.find({"internship_id": internship_id}).sort("applied_at", DESCENDING)
        return serialize_docs(cursor)

    def list_by_status(self, statuses: Iterable[str]) -> List[dict]:
        cursor = self.collection.find({"status": {"$in": list(statuses)}}).sort("applied_at", DESCENDING)
        return serialize_docs(cursor)

    def applied_internship_ids(self, student_id: str) -> set:
        cursor = self.collection.find({"student_id": student_id}, {"internship_id": 1})
        return {doc["internship_id"] for doc in cursor}

    def update_status(
        self,
        application_id: str,
        expected_status: str,
        new_status: str,
        extra: Optional[dict] = None
    ) -> bool:
        """
        Compare-and-set on status. Returns False if the status changed
        since it was read (or the application is gone).
        """
        oid = to_object_id(application_id)
        if oid is None:
            return False
        fields = dict(extra or {}, status=new_status, updated_at=utcnow())
        result = self.collection.update_one(
            {"_id": oid, "status": expected_status},
            {"$set": fields}
        )
        return result.modified_count > 0
