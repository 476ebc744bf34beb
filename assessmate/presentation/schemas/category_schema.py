from pydantic import BaseModel
from typing import List, Optional

# ------------------ Category Schemas ------------------

class CategoryCreate(BaseModel):
    category_name: Optional[str] = None

class CategoryOut(BaseModel):
    category_id: int
    category_name: str

    class Config:
        from_attributes = True

class CategoryListResponse(BaseModel):
    success: bool = True
    categories: List[CategoryOut]

class CategoryCreatedResponse(BaseModel):
    success: bool = True
    message: str
    category_id: int
