from fastapi import APIRouter, Depends, File, HTTPException, UploadFile, status
from sqlalchemy.orm import Session
from assessmate.core.config import get_settings
from assessmate.core.exceptions import AssessMateError
from assessmate.presentation.schemas.question_schema import (
    FlowchartUploadResponse,
    QuestionCreate,
    QuestionCreatedResponse,
    QuestionDetailResponse,
    QuestionListResponse,
)
from assessmate.presentation.dependencies import get_db, admin_required, get_current_user
from assessmate.infrastructure.repositories.question_repo_impl import (
    create_question,
    get_question_by_id,
    get_questions_by_topic,
)
from assessmate.infrastructure.storage.flowchart_storage import save_flowchart
import logging

logger = logging.getLogger(__name__)
router = APIRouter(tags=["Questions"])


@router.post("/questions", response_model=QuestionCreatedResponse, status_code=status.HTTP_201_CREATED)
def add_question(
    question: QuestionCreate,
    db: Session = Depends(get_db),
    admin: dict = Depends(admin_required),
):
    try:
        logger.info(
            f"Admin {admin['user_id']} creating {question.question_type} question for topic {question.topic_id}"
        )
        result = create_question(db, question)
        return {"message": "Question created successfully", "question_id": result.question_id}
    except AssessMateError as e:
        logger.warning(f"Question creation by admin {admin['user_id']} rejected: {e.message}")
        raise HTTPException(status_code=e.status_code, detail=e.message)


@router.get("/questions/{topic_id}", response_model=QuestionListResponse)
def list_questions(
    topic_id: int,
    db: Session = Depends(get_db),
    user: dict = Depends(get_current_user),
):
    try:
        return {"questions": get_questions_by_topic(db, topic_id)}
    except AssessMateError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)


@router.get("/question/{question_id}", response_model=QuestionDetailResponse)
def get_question(
    question_id: int,
    db: Session = Depends(get_db),
    user: dict = Depends(get_current_user),
):
    try:
        return {"question": get_question_by_id(db, question_id)}
    except AssessMateError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)


@router.post("/upload-flowchart", response_model=FlowchartUploadResponse)
def upload_flowchart(
    flowchart: UploadFile = File(None),
    admin: dict = Depends(admin_required),
):
    settings = get_settings()
    try:
        file_path = save_flowchart(flowchart, settings.UPLOAD_DIR, settings.MAX_UPLOAD_BYTES)
        return {"message": "File uploaded successfully", "filePath": file_path}
    except AssessMateError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
