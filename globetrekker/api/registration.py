import logging
from typing import Optional

from fastapi import APIRouter, Depends
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from globetrekker.api.deps import RequestBody, clean, get_db, get_mailer, get_settings, require
from globetrekker.core.config import Settings
from globetrekker.core.errors import DispatchError, InternalError
from globetrekker.models import Registration
from globetrekker.services.mailer import Mailer
from globetrekker.services.notifications import registration_email

logger = logging.getLogger(__name__)

router = APIRouter(tags=["registration"])


class RegistrationRequest(RequestBody):
    name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    gender: Optional[str] = None
    destination: Optional[str] = None
    package: Optional[str] = None
    date: Optional[str] = None
    notes: Optional[str] = None


@router.post("/register")
def register_trip(
    data: RegistrationRequest,
    db: Session = Depends(get_db),
    mailer: Mailer = Depends(get_mailer),
    settings: Settings = Depends(get_settings),
):
    """Store a trip registration, then tell the admin about it.

    The admin mail is best effort: once the row is committed the request
    succeeds whatever the mail provider does.
    """
    require(
        "All fields are required",
        data.name,
        data.email,
        data.phone,
        data.gender,
        data.destination,
        data.package,
        data.date,
    )

    reg = Registration(
        name=clean(data.name),
        email=clean(data.email),
        phone=clean(data.phone),
        gender=clean(data.gender),
        destination=clean(data.destination),
        package=clean(data.package),
        date=clean(data.date),
        notes=clean(data.notes),
    )
    db.add(reg)
    try:
        db.commit()
        db.refresh(reg)
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Registration error")
        raise InternalError()

    if settings.admin_email:
        subject, html = registration_email(reg)
        try:
            mailer.send(settings.sender, settings.admin_email, subject, html, reply_to=reg.email)
        except DispatchError as e:
            logger.warning("Registration %s saved but admin mail failed: %s", reg.id, e)
    else:
        logger.warning("ADMIN_EMAIL not set, registration %s not announced", reg.id)

    return {"message": "Registration successful"}
