import logging
from typing import Optional

from fastapi import APIRouter, Depends

from globetrekker.api.deps import RequestBody, clean, get_mailer, get_settings, require
from globetrekker.core.config import Settings
from globetrekker.core.errors import DispatchError, InternalError
from globetrekker.services.mailer import Mailer
from globetrekker.services.notifications import contact_email

logger = logging.getLogger(__name__)

router = APIRouter(tags=["contact"])


class ContactRequest(RequestBody):
    name: Optional[str] = None
    email: Optional[str] = None
    message: Optional[str] = None


@router.post("/contact")
def contact(
    data: ContactRequest,
    mailer: Mailer = Depends(get_mailer),
    settings: Settings = Depends(get_settings),
):
    # relayed to the operator mailbox only, never stored
    require("Please fill all fields", data.name, data.email, data.message)

    subject, html = contact_email(clean(data.name), clean(data.email), data.message.strip())
    try:
        mailer.send(
            settings.sender,
            settings.operator_address,
            subject,
            html,
            reply_to=clean(data.email),
        )
    except DispatchError as e:
        logger.error("Contact relay failed: %s", e)
        raise InternalError()

    return {"message": "Message sent successfully"}
