from sqlalchemy import Column, Integer, String, ForeignKey
from sqlalchemy.orm import relationship
from ..base import Base


class Topic(Base):
    __tablename__ = "topics"

    topic_id = Column(Integer, primary_key=True, index=True)
    topic_name = Column(String(100), nullable=False)
    subject_id = Column(Integer, ForeignKey("subjects.subject_id", ondelete="CASCADE"), nullable=True, index=True)

    # Relationships
    subject = relationship("Subject", back_populates="topics")
    questions = relationship(
        "Question",
        back_populates="topic",
        cascade="all, delete-orphan"
    )
