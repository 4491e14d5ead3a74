"""Per-application context and the FastAPI dependencies that read it.

The database engine and mail backend live on ``app.state.context``
instead of module globals, so each app instance (and each test) gets its
own.
"""

from dataclasses import dataclass
from typing import Iterator, Optional

from fastapi import Request
from pydantic import BaseModel, ConfigDict
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

from globetrekker.core.config import Settings
from globetrekker.core.errors import ValidationError
from globetrekker.services.mailer import Mailer


@dataclass
class AppContext:
    settings: Settings
    engine: Engine
    session_factory: sessionmaker
    mailer: Mailer


def get_context(request: Request) -> AppContext:
    return request.app.state.context


def get_db(request: Request) -> Iterator[Session]:
    db = get_context(request).session_factory()
    try:
        yield db
    finally:
        db.close()


def get_mailer(request: Request) -> Mailer:
    return get_context(request).mailer


def get_settings(request: Request) -> Settings:
    return get_context(request).settings


class RequestBody(BaseModel):
    # a phone or date sent as a JSON number is kept as its text
    model_config = ConfigDict(coerce_numbers_to_str=True)


def clean(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    value = value.strip()
    return value or None


def require(message: str, *values: Optional[str]) -> None:
    """Raise ``ValidationError(message)`` if any value is missing or blank."""
    if any(clean(v) is None for v in values):
        raise ValidationError(message)
