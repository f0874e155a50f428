"""
Project routes.

Projects are addressed by their generated ObjectId and reference a user via
userId. Responses replace userId with the owner's username, fullName and
email (or None when the owner record is gone).

Creating a project checks that the user exists and then inserts; the two
steps are not atomic, so a user soft-deleted in between still ends up owning
the new project. Owner existence is checked against all users, active or not.
"""
from typing import Iterable, Optional

from fastapi import APIRouter, Depends
from pymongo.database import Database

from database import (
    create_document,
    find_active,
    get_db,
    get_documents,
    parse_object_id,
    soft_delete,
    to_public,
    update_active,
)
from errors import NotFound, ValidationFailed
from schemas import ProjectCreate, ProjectUpdate, changes
from security import require_token

COLLECTION = "project"

OWNER_FIELDS = {"username": 1, "fullName": 1, "email": 1}

router = APIRouter(prefix="/project", tags=["Projects"])


def _owners(db: Database, user_ids: Iterable) -> dict:
    ids = list({uid for uid in user_ids if uid is not None})
    if not ids:
        return {}
    return {u["_id"]: to_public(u) for u in db["user"].find({"_id": {"$in": ids}}, OWNER_FIELDS)}


def _populate(db: Database, projects: list) -> list:
    owners = _owners(db, (p.get("userId") for p in projects))
    result = []
    for p in projects:
        public = to_public(p)
        public["userId"] = owners.get(p.get("userId"))
        result.append(public)
    return result


def _project_filter(project_id: str) -> dict:
    return {"_id": parse_object_id(project_id)}


@router.get("")
def list_projects(status: Optional[str] = None, userId: Optional[str] = None, db: Database = Depends(get_db)):
    filt = {}
    if status:
        filt["status"] = status
    if userId:
        filt["userId"] = parse_object_id(userId, "Invalid user ID format")

    projects = _populate(db, get_documents(db, COLLECTION, filt))
    response = {"success": True, "count": len(projects), "data": projects}
    if status or userId:
        response["filter"] = {"status": status, "userId": userId}
    return response


@router.get("/{project_id}")
def get_project(project_id: str, db: Database = Depends(get_db)):
    project = find_active(db, COLLECTION, _project_filter(project_id))
    if not project:
        raise NotFound("Project")
    return {"success": True, "data": _populate(db, [project])[0]}


@router.post("", status_code=201)
def create_project(payload: ProjectCreate, db: Database = Depends(get_db), _token: str = Depends(require_token)):
    owner_id = parse_object_id(payload.userId)
    if db["user"].find_one({"_id": owner_id}, {"_id": 1}) is None:
        raise ValidationFailed(["User not found"])

    data = payload.model_dump()
    data["userId"] = owner_id
    project = create_document(db, COLLECTION, data)
    return {"success": True, "message": "Project created successfully", "data": _populate(db, [project])[0]}


@router.put("/{project_id}")
def update_project(project_id: str, payload: ProjectUpdate, db: Database = Depends(get_db)):
    project = update_active(db, COLLECTION, _project_filter(project_id), changes(payload))
    if not project:
        raise NotFound("Project")
    return {"success": True, "message": "Project updated successfully", "data": _populate(db, [project])[0]}


@router.delete("/{project_id}")
def delete_project(project_id: str, db: Database = Depends(get_db)):
    if not soft_delete(db, COLLECTION, _project_filter(project_id)):
        raise NotFound("Project")
    return {"success": True, "message": "Project deleted successfully"}
