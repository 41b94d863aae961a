from typing import Any

from fastapi import APIRouter
from fastapi import Depends
from fastapi import Response
from fastapi import status
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from orderdesk import crud
from orderdesk.db import get_db
from orderdesk.hashing import hash_password
from orderdesk.models import User
from orderdesk.schemas import UserCreate
from orderdesk.schemas import UserPatch
from orderdesk.schemas import UserRead

router = APIRouter(tags=["users"], default_response_class=JSONResponse)


def _to_columns(changes: dict[str, Any]) -> dict[str, Any]:
    """Swap a plain ``password`` for the ``password_hash`` column."""
    if "password" in changes:
        changes["password_hash"] = hash_password(changes.pop("password"))
    if "email" in changes:
        changes["email"] = changes["email"].lower()
    return changes


@router.get("/user", response_model=list[UserRead])
def list_users(db: Session = Depends(get_db)):
    return db.query(User).order_by(User.id).all()


@router.post("/user", response_model=UserRead, status_code=status.HTTP_201_CREATED)
def create_user(data: UserCreate, db: Session = Depends(get_db)):
    return crud.create(db, User(**_to_columns(data.model_dump())), "user")


@router.put("/user/{id}", response_model=UserRead)
def replace_user(id: int, data: UserCreate, db: Session = Depends(get_db)):
    user = crud.get_or_404(db, User, id, "user")
    return crud.update(db, user, _to_columns(data.model_dump(exclude_unset=True)), "user")


@router.patch("/user/{id}", response_model=UserRead)
def update_user(id: int, data: UserPatch, db: Session = Depends(get_db)):
    user = crud.get_or_404(db, User, id, "user")
    return crud.update(db, user, _to_columns(data.model_dump(exclude_unset=True)), "user")


@router.delete("/user/{id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_user(id: int, db: Session = Depends(get_db)):
    user = crud.get_or_404(db, User, id, "user")
    crud.delete(db, user, "user")
    return Response(status_code=status.HTTP_204_NO_CONTENT)
