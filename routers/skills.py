import re
from typing import Optional

from fastapi import APIRouter, Depends
from pymongo.database import Database

from database import (
    create_document,
    find_active,
    get_db,
    get_documents,
    key_filter,
    soft_delete,
    to_public,
    update_active,
)
from errors import NotFound
from schemas import SkillCreate, SkillUpdate, changes

COLLECTION = "skill"

LEADING_INT = re.compile(r"\s*([+-]?\d+)")

router = APIRouter(prefix="/skill", tags=["Skills"])


def _proficiency_filter(raw: Optional[str]) -> Optional[int]:
    # Leading digits decide the level ("5.0" -> 5, "3abc" -> 3); out-of-range
    # or non-numeric levels are ignored, not rejected.
    match = LEADING_INT.match(raw or "")
    if not match:
        return None
    level = int(match.group(1))
    return level if 1 <= level <= 5 else None


@router.get("")
def list_skills(
    category: Optional[str] = None,
    proficiencyLevel: Optional[str] = None,
    db: Database = Depends(get_db),
):
    filt = {}
    if category:
        filt["category"] = category.strip().lower()
    level = _proficiency_filter(proficiencyLevel)
    if level is not None:
        filt["proficiencyLevel"] = level

    skills = get_documents(db, COLLECTION, filt)
    response = {"success": True, "count": len(skills), "data": [to_public(s) for s in skills]}
    if category or proficiencyLevel:
        response["filter"] = {"category": category, "proficiencyLevel": proficiencyLevel}
    return response


@router.get("/{name}")
def get_skill(name: str, db: Database = Depends(get_db)):
    skill = find_active(db, COLLECTION, key_filter("name", name))
    if not skill:
        raise NotFound("Skill")
    return {"success": True, "data": to_public(skill)}


@router.post("", status_code=201)
def create_skill(payload: SkillCreate, db: Database = Depends(get_db)):
    skill = create_document(db, COLLECTION, payload)
    return {"success": True, "message": "Skill created successfully", "data": to_public(skill)}


@router.put("/{name}")
def update_skill(name: str, payload: SkillUpdate, db: Database = Depends(get_db)):
    skill = update_active(db, COLLECTION, key_filter("name", name, exact=True), changes(payload))
    if not skill:
        raise NotFound("Skill")
    return {"success": True, "message": "Skill updated successfully", "data": to_public(skill)}


@router.delete("/{name}")
def delete_skill(name: str, db: Database = Depends(get_db)):
    if not soft_delete(db, COLLECTION, key_filter("name", name, exact=True)):
        raise NotFound("Skill")
    return {"success": True, "message": "Skill deleted successfully"}
