# models/room.py
import enum

from sqlalchemy import Column, Integer, String, Numeric, Boolean, DateTime, ForeignKey, UniqueConstraint, Index, CheckConstraint, func
from sqlalchemy.orm import relationship
from .base import Base, utcnow


class RoomType(str, enum.Enum):
     SINGLE = "single"
     DOUBLE = "double"
     SHARED = "shared"


class RoomStatus(str, enum.Enum):
     AVAILABLE = "available"
     OCCUPIED = "occupied"
     MAINTENANCE = "maintenance"


class Room(Base):
     """
     Room model - rentable unit inside a hostel.

     occupancy counts approved, active tenants and never exceeds capacity.
     Tenant workflows change it only through services.occupancy_service;
     RoomService.update_room also lets an admin correct it by hand.
     """
     __tablename__ = "rooms"
     __table_args__ = (
          UniqueConstraint("property_id", "number", name="uq_rooms_property_number"),
          Index("ix_rooms_property_status", "property_id", "status"),
          Index("ix_rooms_type_status", "type", "status"),
          CheckConstraint("occupancy >= 0 AND occupancy <= capacity", name="ck_rooms_occupancy_bounds"),
     )

     id = Column(Integer, primary_key=True, autoincrement=True)
     property_id = Column(Integer, ForeignKey("properties.id", ondelete="CASCADE"), nullable=True, index=True)

     number = Column(String(50), nullable=False)
     type = Column(String(20), default=RoomType.SINGLE.value, nullable=False)
     rent = Column(Numeric(12, 2), nullable=False)
     capacity = Column(Integer, default=1, nullable=False)
     occupancy = Column(Integer, default=0, nullable=False)
     status = Column(String(20), default=RoomStatus.AVAILABLE.value, nullable=False, index=True)
     active = Column(Boolean, default=True, nullable=False, index=True)

     # Timestamps
     created_at = Column(DateTime, default=utcnow, server_default=func.now(), nullable=False)
     updated_at = Column(DateTime, default=utcnow, onupdate=utcnow, nullable=True)

     @property
     def is_full(self) -> bool:
          return self.occupancy >= self.capacity

     @property
     def vacancies(self) -> int:
          return max(self.capacity - self.occupancy, 0)

     # Relationships (declared after the @property helpers, which need the builtin name)
     property = relationship("Property", back_populates="rooms")
     tenants = relationship("Tenant", back_populates="room")

     def __repr__(self):
          return f"<Room(id={self.id}, number='{self.number}', occupancy={self.occupancy}/{self.capacity}, status='{self.status}')>"
