
from sqlalchemy import Column, Integer, String, ForeignKey
from sqlalchemy.orm import relationship
from class_scheduler.database import Base

class Section(Base):
    __tablename__ = "section"

    section_id = Column(Integer, primary_key=True)
    pattern_slot_id = Column(Integer, ForeignKey("pattern_slot.pattern_slot_id"), nullable=False)

    course_code = Column(String(20), nullable=False)
    instructor_name = Column(String(100))
    room_name = Column(String(50))
    grade_level = Column(String(10))

    pattern_slot = relationship("PatternSlot", back_populates="sections")
