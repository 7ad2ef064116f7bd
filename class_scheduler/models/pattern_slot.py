
from sqlalchemy import Column, Integer, String, ForeignKey
from sqlalchemy.orm import relationship
from class_scheduler.database import Base

class PatternSlot(Base):
    __tablename__ = "pattern_slot"

    pattern_slot_id = Column(Integer, primary_key=True)
    # one character per weekday the pattern meets, e.g. "MWF"
    day_code = Column(String(7), nullable=False, default="")
    time_slot_id = Column(Integer, ForeignKey("time_slot.time_slot_id", ondelete="CASCADE"), nullable=False)

    time_slot = relationship("TimeSlot", back_populates="patterns")
    sections = relationship("Section", back_populates="pattern_slot")
