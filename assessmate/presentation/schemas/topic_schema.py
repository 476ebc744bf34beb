from pydantic import BaseModel
from typing import List, Optional

# ------------------ Topic Schemas ------------------

class TopicCreate(BaseModel):
    topic_name: Optional[str] = None
    subject_id: Optional[int] = None

class TopicUpdate(BaseModel):
    topic_name: Optional[str] = None

class TopicOut(BaseModel):
    topic_id: int
    topic_name: str
    subject_id: Optional[int] = None

    class Config:
        from_attributes = True

class TopicListResponse(BaseModel):
    success: bool = True
    topics: List[TopicOut]

class TopicCreatedResponse(BaseModel):
    success: bool = True
    message: str
    topic_id: int
