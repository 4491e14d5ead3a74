from sqlalchemy import Column, Integer, String, DateTime
from datetime import datetime
from globetrekker.core.database import Base


class Subscriber(Base):
    __tablename__ = "subscribers"

    id = Column(Integer, primary_key=True, index=True)
    email = Column(String(191), unique=True, index=True, nullable=False)
    subscribed_at = Column(DateTime, default=datetime.utcnow, nullable=False)
