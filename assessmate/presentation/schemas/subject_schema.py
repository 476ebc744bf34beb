from pydantic import BaseModel
from typing import List, Optional

# ------------------ Subject Schemas ------------------

class SubjectCreate(BaseModel):
    subject_name: Optional[str] = None
    category_id: Optional[int] = None

class SubjectUpdate(BaseModel):
    subject_name: Optional[str] = None

class SubjectOut(BaseModel):
    subject_id: int
    subject_name: str
    category_id: Optional[int] = None

    class Config:
        from_attributes = True

class SubjectListResponse(BaseModel):
    success: bool = True
    subjects: List[SubjectOut]

class SubjectCreatedResponse(BaseModel):
    success: bool = True
    message: str
    subject_id: int
