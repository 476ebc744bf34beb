#user_model.py
from sqlalchemy import Column, Integer, SmallInteger, String, DateTime
from sqlalchemy.sql import func
from ..base import Base
from sqlalchemy import UniqueConstraint

ADMIN_ROLE = 0
STUDENT_ROLE = 1


class UserModel(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), nullable=False)
    roll_no = Column(String(50), nullable=True)  # admins have none
    year_of_study = Column(Integer, nullable=True)
    department = Column(String(100), nullable=True)
    college_name = Column(String(255), nullable=True)
    mobile_no = Column(String(15), nullable=False)
    email = Column(String(100), nullable=False, index=True)
    password = Column(String(255), nullable=False)  # passlib hash
    user_role = Column(SmallInteger, nullable=False, default=STUDENT_ROLE, server_default="1")
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    __table_args__ = (
        UniqueConstraint("email", name="uq_email_user"),
        UniqueConstraint("roll_no", name="uq_roll_no_user"),
    )
