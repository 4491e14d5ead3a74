from sqlalchemy import Column, Integer, String, DateTime
from datetime import datetime
from globetrekker.core.database import Base


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    # NULLs do not collide on a unique index, so accounts may skip a username
    username = Column(String(64), unique=True, index=True, nullable=True)
    email = Column(String(191), unique=True, index=True, nullable=False)
    password_hash = Column(String(128), nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
