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
from schemas import ThemeCreate, ThemeUpdate, changes
from security import require_token

COLLECTION = "theme"

router = APIRouter(prefix="/theme", tags=["Themes"])


@router.get("")
def list_themes(db: Database = Depends(get_db)):
    themes = get_documents(db, COLLECTION)
    return {"success": True, "count": len(themes), "data": [to_public(t) for t in themes]}


@router.get("/{theme_name}")
def get_theme(theme_name: str, db: Database = Depends(get_db)):
    theme = find_active(db, COLLECTION, key_filter("themeName", theme_name))
    if not theme:
        raise NotFound("Theme")
    return {"success": True, "data": to_public(theme)}


@router.post("", status_code=201)
def create_theme(payload: ThemeCreate, db: Database = Depends(get_db), _token: str = Depends(require_token)):
    theme = create_document(db, COLLECTION, payload)
    return {"success": True, "message": "Theme created successfully", "data": to_public(theme)}


@router.put("/{theme_name}")
def update_theme(
    theme_name: str,
    payload: ThemeUpdate,
    db: Database = Depends(get_db),
    _token: str = Depends(require_token),
):
    theme = update_active(db, COLLECTION, {"themeName": theme_name}, changes(payload))
    if not theme:
        raise NotFound("Theme")
    return {"success": True, "message": "Theme updated successfully", "data": to_public(theme)}


@router.delete("/{theme_name}")
def delete_theme(theme_name: str, db: Database = Depends(get_db)):
    if not soft_delete(db, COLLECTION, {"themeName": theme_name}):
        raise NotFound("Theme")
    return {"success": True, "message": "Theme deleted successfully"}
