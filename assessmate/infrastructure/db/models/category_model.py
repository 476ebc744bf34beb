from sqlalchemy import Column, Integer, String
from sqlalchemy.orm import relationship
from ..base import Base


class Category(Base):
    __tablename__ = "categories"

    category_id = Column(Integer, primary_key=True, index=True)
    category_name = Column(String(100), nullable=False)

    # Relationships with cascade delete
    subjects = relationship("Subject", back_populates="category", cascade="all, delete-orphan")
