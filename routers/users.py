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
from schemas import UserCreate, UserUpdate, changes

COLLECTION = "user"

router = APIRouter(prefix="/user", tags=["Users"])


@router.get("")
def list_users(db: Database = Depends(get_db)):
    users = get_documents(db, COLLECTION)
    return {"success": True, "count": len(users), "data": [to_public(u) for u in users]}


@router.get("/{username}")
def get_user(username: str, db: Database = Depends(get_db)):
    user = find_active(db, COLLECTION, key_filter("username", username))
    if not user:
        raise NotFound("User")
    return {"success": True, "data": to_public(user)}


@router.post("", status_code=201)
def create_user(payload: UserCreate, db: Database = Depends(get_db)):
    user = create_document(db, COLLECTION, payload)
    return {"success": True, "message": "User created successfully", "data": to_public(user)}


@router.put("/{username}")
def update_user(username: str, payload: UserUpdate, db: Database = Depends(get_db)):
    user = update_active(db, COLLECTION, {"username": username}, changes(payload))
    if not user:
        raise NotFound("User")
    return {"success": True, "message": "User updated successfully", "data": to_public(user)}


@router.delete("/{username}")
def delete_user(username: str, db: Database = Depends(get_db)):
    if not soft_delete(db, COLLECTION, {"username": username}):
        raise NotFound("User")
    return {"success": True, "message": "User deleted successfully"}
