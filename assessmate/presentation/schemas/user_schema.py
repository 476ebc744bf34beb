from datetime import datetime
from pydantic import BaseModel
from typing import Optional


class LoginRequest(BaseModel):
    email: Optional[str] = None
    password: Optional[str] = None


class UserSummary(BaseModel):
    id: int
    name: str
    email: str
    user_role: int

    class Config:
        from_attributes = True


class UserProfileResponse(BaseModel):
    id: int
    name: str
    email: str
    roll_no: Optional[str] = None
    year_of_study: Optional[int] = None
    department: Optional[str] = None
    college_name: Optional[str] = None
    mobile_no: Optional[str] = None
    user_role: int
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True  # SQLAlchemy compatibility


class LoginResponse(BaseModel):
    success: bool = True
    message: str
    user: UserSummary
    access_token: str
    token_type: str = "bearer"


class ProfileResponse(BaseModel):
    success: bool = True
    user: UserProfileResponse
