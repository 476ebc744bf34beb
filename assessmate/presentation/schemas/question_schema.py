# question_schema.py
from datetime import datetime
from pydantic import BaseModel
from typing import List, Optional


class QuestionCreate(BaseModel):
    """Flat authoring payload; which fields are required depends on question_type."""

    topic_id: Optional[int] = None
    question_type: Optional[str] = None
    question_text: Optional[str] = None
    option_A: Optional[str] = None
    option_B: Optional[str] = None
    option_C: Optional[str] = None
    option_D: Optional[str] = None
    correct_answer: Optional[str] = None
    flowchart_image: Optional[str] = None
    # Programming variant
    language: Optional[str] = None
    starter_code: Optional[str] = None
    expected_output: Optional[str] = None


class QuestionOut(BaseModel):
    question_id: int
    topic_id: Optional[int] = None
    question_type: str
    question_text: str
    option_A: Optional[str] = None
    option_B: Optional[str] = None
    option_C: Optional[str] = None
    option_D: Optional[str] = None
    correct_answer: Optional[str] = None
    flowchart_image: Optional[str] = None
    created_at: Optional[datetime] = None
    language: Optional[str] = None
    starter_code: Optional[str] = None
    expected_output: Optional[str] = None
    answer: Optional[str] = None

    class Config:
        from_attributes = True


class QuestionListResponse(BaseModel):
    success: bool = True
    questions: List[QuestionOut]


class QuestionDetailResponse(BaseModel):
    success: bool = True
    question: QuestionOut


class QuestionCreatedResponse(BaseModel):
    success: bool = True
    message: str
    question_id: int


class FlowchartUploadResponse(BaseModel):
    success: bool = True
    message: str
    filePath: str
