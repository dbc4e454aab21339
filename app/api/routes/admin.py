from datetime import datetime
from typing import Annotated

from fastapi import APIRouter, HTTPException, Depends
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel
from sqlalchemy.orm import Session
import structlog

from app.api.deps import get_db, require_staff
from app.core.security import get_password_hash
from app.repositories.models import User, UserRole

router = APIRouter(dependencies=[Depends(require_staff)])
log = structlog.get_logger()

CurrentUser = Annotated[User, Depends(require_staff)]


class _Camel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)


class UserCreate(_Camel):
    email: str
    password: str
    first_name: str | None = None
    last_name: str | None = None
    phone: str | None = None
    role: UserRole = UserRole.admin
    is_active: bool = True


class UserOut(_Camel):
    id: int
    email: str
    first_name: str | None
    last_name: str | None
    phone: str | None
    role: UserRole
    is_active: bool
    last_login: datetime | None
    created_at: datetime | None


class UserUpdate(_Camel):
    first_name: str | None = None
    last_name: str | None = None
    phone: str | None = None
    password: str | None = None
    role: UserRole | None = None
    is_active: bool | None = None


def _ensure_can_manage(actor: User, role: UserRole | None) -> None:
    # admins manage admins; super admins manage everyone
    if role == UserRole.super_admin and actor.role != UserRole.super_admin:
        raise HTTPException(status_code=403, detail="super_admin_only")


@router.get("/users", response_model=list[UserOut])
def list_users(
    current: CurrentUser,
    db: Session = Depends(get_db),
    role: UserRole | None = None,
    is_active: bool | None = None,
    limit: int = 50,
    offset: int = 0,
):
    q = db.query(User)
    if current.role != UserRole.super_admin:
        q = q.filter(User.role == UserRole.admin)
    if role is not None:
        q = q.filter(User.role == role)
    if is_active is not None:
        q = q.filter(User.is_active == is_active)
    q = q.order_by(User.id.asc()).limit(max(1, min(limit, 200))).offset(max(0, offset))
    return q.all()


@router.post("/users", response_model=UserOut)
def create_user(payload: UserCreate, current: CurrentUser, db: Session = Depends(get_db)):
    _ensure_can_manage(current, payload.role)
    email = (payload.email or "").strip().lower()
    if not email:
        raise HTTPException(status_code=400, detail="email_required")
    if db.query(User).filter(User.email == email).first():
        raise HTTPException(status_code=400, detail="email_already_exists")

    user = User(
        email=email,
        first_name=payload.first_name,
        last_name=payload.last_name,
        phone=payload.phone,
        hashed_password=get_password_hash(payload.password),
        role=payload.role,
        is_active=bool(payload.is_active),
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    log.info("user_created", user_id=user.id, role=user.role.value)
    return user


@router.patch("/users/{user_id}", response_model=UserOut)
def update_user(user_id: int, payload: UserUpdate, current: CurrentUser, db: Session = Depends(get_db)):
    user = db.get(User, user_id)
    if not user:
        raise HTTPException(status_code=404, detail="user_not_found")
    _ensure_can_manage(current, user.role)
    data = payload.model_dump(exclude_unset=True)
    if data.get("role") is not None:
        _ensure_can_manage(current, data["role"])
        user.role = data["role"]
    for field in ("first_name", "last_name", "phone"):
        if field in data:
            setattr(user, field, data[field])
    if data.get("is_active") is not None:
        user.is_active = bool(data["is_active"])
    if data.get("password"):
        user.hashed_password = get_password_hash(data["password"])
    db.add(user)
    db.commit()
    db.refresh(user)
    log.info("user_updated", user_id=user.id, fields=sorted(k for k in data if k != "password"))
    return user


@router.patch("/users/{user_id}/toggle-status", response_model=UserOut)
def toggle_user_status(user_id: int, current: CurrentUser, db: Session = Depends(get_db)):
    user = db.get(User, user_id)
    if not user:
        raise HTTPException(status_code=404, detail="user_not_found")
    _ensure_can_manage(current, user.role)
    user.is_active = not user.is_active
    db.add(user)
    db.commit()
    db.refresh(user)
    log.info("user_status_toggled", user_id=user.id, is_active=user.is_active)
    return user


@router.delete("/users/{user_id}")
def delete_user(user_id: int, current: CurrentUser, db: Session = Depends(get_db)):
    user = db.get(User, user_id)
    if not user:
        raise HTTPException(status_code=404, detail="user_not_found")
    # super admins are never deleted from the console, not even by another super admin
    if user.role == UserRole.super_admin:
        raise HTTPException(status_code=403, detail="super_admin_only")
    db.delete(user)
    db.commit()
    log.info("user_deleted", user_id=user_id, by=current.id)
    return {"deleted": user_id}
