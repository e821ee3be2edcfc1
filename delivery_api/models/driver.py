from uuid import uuid4
from sqlalchemy import Column, String, DateTime, Boolean
from sqlalchemy.orm import relationship
from delivery_api.core.database import Base, utcnow


def generate_id() -> str:
    return uuid4().hex


class Driver(Base):
    __tablename__ = "drivers"

    id = Column(String(32), primary_key=True, default=generate_id)
    name = Column(String(255), nullable=False)
    is_available = Column(Boolean, nullable=False, default=True, index=True)
    created_at = Column(DateTime, nullable=False, default=utcnow, index=True)

    # Relationships
    orders = relationship("Order", back_populates="driver", passive_deletes=True)
