# Copyright (c) 2025 Shiladitya Mallick
# This file is part of the MindTrack - Check-in & CBT Companion project.
# Licensed under the MIT License - see the LICENSE file for details.

from fastapi import Depends, HTTPException
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.orm import Session
from app.utils.jwt_utils import verify_access_token
from app.models.database import SessionLocal
from app.models.user import User

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="auth/login")

def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()

def get_current_user(token: str = Depends(oauth2_scheme), db: Session = Depends(get_db)) -> User:
    user_id = verify_access_token(token)

    user = db.query(User).filter(User.id == user_id).first()
    if not user:
        raise HTTPException(status_code=401, detail="❌ User not found")

    return user

def get_current_user_id(user: User = Depends(get_current_user)) -> int:
    return user.id
