"""Account signup and login.

Login only checks credentials and echoes the profile back; there are no
tokens or sessions.
"""

from __future__ import annotations

import logging
from typing import Optional

from fastapi import APIRouter, Depends
from sqlalchemy import or_, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from globetrekker.api.deps import RequestBody, clean, get_db, get_settings, require
from globetrekker.core.config import Settings
from globetrekker.core.errors import Conflict, InternalError, NotFound, Unauthorized
from globetrekker.core.security import hash_password, verify_password
from globetrekker.models import User

logger = logging.getLogger(__name__)

router = APIRouter(tags=["auth"])


class SignupRequest(RequestBody):
    username: Optional[str] = None
    email: Optional[str] = None
    password: Optional[str] = None


class LoginRequest(RequestBody):
    identifier: Optional[str] = None
    password: Optional[str] = None


@router.post("/signup")
def signup(
    data: SignupRequest,
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
):
    require("Email and password required", data.email, data.password)

    user = User(
        username=clean(data.username),
        email=clean(data.email),
        password_hash=hash_password(data.password, rounds=settings.bcrypt_rounds),
    )
    db.add(user)
    try:
        db.commit()
    except IntegrityError:
        # email or username taken; the unique indexes are authoritative
        db.rollback()
        raise Conflict("Account already exists")
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Signup error")
        raise InternalError()

    logger.info("Account created for %s", data.email.strip())
    return {"message": "Signup successful"}


@router.post("/login")
def login(data: LoginRequest, db: Session = Depends(get_db)):
    require("Identifier and password required", data.identifier, data.password)
    identifier = clean(data.identifier)

    user = db.execute(
        select(User).where(or_(User.email == identifier, User.username == identifier))
    ).scalars().first()
    if not user:
        raise NotFound("Account does not exist")

    if not verify_password(data.password, user.password_hash):
        logger.info("Failed login for %s", identifier)
        raise Unauthorized("Incorrect password")

    return {
        "message": "Login successful",
        "username": user.username,
        "email": user.email,
    }
