from sqlalchemy import Column, Integer, String, ForeignKey
from sqlalchemy.orm import relationship
from ..base import Base


class Subject(Base):
    __tablename__ = "subjects"

    subject_id = Column(Integer, primary_key=True, index=True)
    subject_name = Column(String(100), nullable=False)
    # Nullable in the schema, required by the authoring API
    category_id = Column(Integer, ForeignKey("categories.category_id", ondelete="CASCADE"), nullable=True, index=True)

    # Relationships
    category = relationship("Category", back_populates="subjects")
    topics = relationship("Topic", back_populates="subject", cascade="all, delete-orphan")
