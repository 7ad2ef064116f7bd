
from sqlalchemy import Column, Integer, Time
from sqlalchemy.orm import relationship
from class_scheduler.database import Base

class TimeSlot(Base):
    __tablename__ = "time_slot"

    time_slot_id = Column(Integer, primary_key=True)
    start_time = Column(Time, nullable=False)
    end_time = Column(Time, nullable=False)

    patterns = relationship("PatternSlot", back_populates="time_slot")
