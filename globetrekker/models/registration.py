from sqlalchemy import Column, Integer, String, Text, DateTime
from datetime import datetime
from globetrekker.core.database import Base


class Registration(Base):
    """A trip sign-up.  Rows are append-only and not deduplicated."""

    __tablename__ = "registrations"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(128), nullable=False)
    email = Column(String(191), index=True, nullable=False)
    phone = Column(String(32), nullable=False)
    gender = Column(String(32), nullable=False)
    destination = Column(String(128), nullable=False)
    package = Column(String(64), nullable=False)
    # kept as submitted by the booking form, e.g. "2026-03-14"
    date = Column(String(32), nullable=False)
    notes = Column(Text, nullable=True)
    registered_at = Column(DateTime, default=datetime.utcnow, nullable=False)
