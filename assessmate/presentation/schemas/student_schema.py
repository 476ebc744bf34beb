from datetime import datetime
from pydantic import BaseModel, ConfigDict
from typing import List, Optional, Union


class StudentCreate(BaseModel):
    model_config = ConfigDict(coerce_numbers_to_str=True)

    name: Optional[str] = None
    roll_no: Optional[str] = None
    year_of_study: Optional[Union[int, str]] = None
    department: Optional[str] = None
    college_name: Optional[str] = None
    mobile_no: Optional[str] = None
    email: Optional[str] = None
    password: Optional[str] = None


class StudentUpdate(StudentCreate):
    """Same fields as StudentCreate; a blank password keeps the stored one."""


class StudentBulkCreate(BaseModel):
    students: Optional[List[StudentCreate]] = None


class StudentOut(BaseModel):
    id: int
    name: str
    roll_no: Optional[str] = None
    year_of_study: Optional[int] = None
    department: Optional[str] = None
    college_name: Optional[str] = None
    mobile_no: Optional[str] = None
    email: str
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class PaginationOut(BaseModel):
    currentPage: int
    totalPages: int
    totalStudents: int
    hasNext: bool
    hasPrev: bool


class StudentPage(BaseModel):
    students: List[StudentOut]
    pagination: PaginationOut


class StudentPageResponse(StudentPage):
    success: bool = True


class StudentCreatedResponse(BaseModel):
    success: bool = True
    message: str
    studentId: int
