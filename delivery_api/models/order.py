import enum
from sqlalchemy import Column, String, DateTime, Float, ForeignKey, Text
from sqlalchemy.orm import relationship
from delivery_api.core.database import Base, utcnow
from delivery_api.models.driver import generate_id


class OrderStatus(str, enum.Enum):
    PENDING = "PENDING"
    ASSIGNED = "ASSIGNED"
    IN_TRANSIT = "IN_TRANSIT"
    DELIVERED = "DELIVERED"

    def can_transition_to(self, target: "OrderStatus") -> bool:
        return target == self or target in ALLOWED_TRANSITIONS[self]


# Forward moves of the delivery pipeline. Only enforced on update when
# STRICT_STATUS_TRANSITIONS is enabled.
ALLOWED_TRANSITIONS = {
    OrderStatus.PENDING: {OrderStatus.ASSIGNED},
    OrderStatus.ASSIGNED: {OrderStatus.IN_TRANSIT},
    OrderStatus.IN_TRANSIT: {OrderStatus.DELIVERED},
    OrderStatus.DELIVERED: set(),
}

# Status -> milestone column stamped when that status is written
MILESTONE_FIELDS = {
    OrderStatus.ASSIGNED: "assigned_at",
    OrderStatus.IN_TRANSIT: "in_transit_at",
    OrderStatus.DELIVERED: "delivered_at",
}


class Order(Base):
    __tablename__ = "orders"

    id = Column(String(32), primary_key=True, default=generate_id)

    # Customer
    customer_name = Column(String(255), nullable=False)
    customer_phone = Column(String(50), nullable=False)
    delivery_address = Column(String(500), nullable=False)
    order_details = Column(Text, nullable=True)

    status = Column(String(20), nullable=False, default=OrderStatus.PENDING.value, index=True)

    # Geocoded delivery point
    latitude = Column(Float, nullable=True)
    longitude = Column(Float, nullable=True)

    driver_id = Column(String(32), ForeignKey("drivers.id", ondelete="SET NULL"), nullable=True, index=True)

    # Timestamps
    created_at = Column(DateTime, nullable=False, default=utcnow, index=True)
    updated_at = Column(DateTime, nullable=False, default=utcnow, onupdate=utcnow)
    assigned_at = Column(DateTime, nullable=True)
    in_transit_at = Column(DateTime, nullable=True)
    delivered_at = Column(DateTime, nullable=True)

    # Relationships
    driver = relationship("Driver", back_populates="orders")
