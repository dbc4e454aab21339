from datetime import datetime

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.security import OAuth2PasswordRequestForm
from sqlalchemy.orm import Session

from app.api.deps import get_db, get_current_user
from app.core.config import settings
from app.core.security import verify_password, create_access_token
from app.repositories.models import User

router = APIRouter()


@router.post("/login", summary="Sign in with email and password; returns a JWT")
def login(form_data: OAuth2PasswordRequestForm = Depends(), db: Session = Depends(get_db)):
    # the OAuth2 form "username" carries the email
    email = form_data.username.strip().lower()
    user: User | None = db.query(User).filter(User.email == email).first()
    if not user or not user.is_active:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="invalid_credentials")
    if not verify_password(form_data.password, user.hashed_password):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="invalid_credentials")

    user.last_login = datetime.utcnow()
    db.add(user)
    db.commit()

    access_token = create_access_token(user.email, user.role.value, expires_minutes=settings.AUTH_JWT_EXPIRE_MINUTES)
    return {"access_token": access_token, "token_type": "bearer"}


@router.get("/me", summary="Current user (from the bearer token)")
def read_me(current_user: User = Depends(get_current_user)):
    return {
        "id": current_user.id,
        "email": current_user.email,
        "firstName": current_user.first_name,
        "lastName": current_user.last_name,
        "role": current_user.role.value,
        "isActive": current_user.is_active,
        "lastLogin": current_user.last_login,
    }
