from __future__ import annotations

import logging
from typing import Optional

from fastapi import APIRouter, Depends
from sqlalchemy import delete
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from globetrekker.api.deps import RequestBody, clean, get_db, get_mailer, get_settings, require
from globetrekker.core.config import Settings
from globetrekker.core.errors import Conflict, DispatchError, InternalError
from globetrekker.models import Subscriber
from globetrekker.services.mailer import Mailer
from globetrekker.services.notifications import welcome_email

logger = logging.getLogger(__name__)

router = APIRouter(tags=["newsletter"])


class SubscribeRequest(RequestBody):
    email: Optional[str] = None


@router.post("/subscribe")
def subscribe(
    data: SubscribeRequest,
    db: Session = Depends(get_db),
    mailer: Mailer = Depends(get_mailer),
    settings: Settings = Depends(get_settings),
):
    """Add an e-mail to the newsletter list and send the welcome mail.

    The row is committed before the mail goes out so no write lock is held
    while the provider is slow.  If sending fails the row is removed again,
    so the visitor can simply retry.
    """
    require("Email is required", data.email)
    email = clean(data.email)

    db.add(Subscriber(email=email))
    try:
        # the unique index on email is what decides "already subscribed"
        db.commit()
    except IntegrityError:
        db.rollback()
        raise Conflict("Already subscribed")
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Subscription error")
        raise InternalError()

    subject, html = welcome_email()
    try:
        mailer.send(settings.sender, email, subject, html)
    except DispatchError as e:
        logger.error("Welcome mail to %s failed, removing subscription: %s", email, e)
        try:
            db.execute(delete(Subscriber).where(Subscriber.email == email))
            db.commit()
        except SQLAlchemyError:
            db.rollback()
            logger.exception("Could not remove subscriber %s", email)
        raise InternalError()

    logger.info("New subscriber %s", email)
    return {"message": "Subscription successful"}
