from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from assessmate.core.exceptions import AssessMateError
from assessmate.presentation.schemas.topic_schema import (
    TopicCreate,
    TopicCreatedResponse,
    TopicListResponse,
    TopicUpdate,
)
from assessmate.presentation.schemas.common_schema import MessageResponse
from assessmate.presentation.dependencies import get_db, admin_required, get_current_user
from assessmate.infrastructure.repositories.topic_repo_impl import (
    create_topic,
    get_topics_by_subject,
    update_topic,
    delete_topic,
)
import logging

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/topics", tags=["Topics"])


@router.get("/{subject_id}", response_model=TopicListResponse)
def list_topics(
    subject_id: int,
    db: Session = Depends(get_db),
    user: dict = Depends(get_current_user),
):
    try:
        return {"topics": get_topics_by_subject(db, subject_id)}
    except AssessMateError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)


@router.post("", response_model=TopicCreatedResponse, status_code=status.HTTP_201_CREATED)
def add_topic(
    topic: TopicCreate,
    db: Session = Depends(get_db),
    admin: dict = Depends(admin_required),
):
    try:
        result = create_topic(db, topic)
        return {"message": "Topic created successfully", "topic_id": result.topic_id}
    except AssessMateError as e:
        logger.warning(f"Admin {admin['user_id']} failed to create topic: {e.message}")
        raise HTTPException(status_code=e.status_code, detail=e.message)


@router.put("/{topic_id}", response_model=MessageResponse)
def modify_topic(
    topic_id: int,
    topic: TopicUpdate,
    db: Session = Depends(get_db),
    admin: dict = Depends(admin_required),
):
    try:
        update_topic(db, topic_id, topic)
        return {"message": "Topic updated successfully"}
    except AssessMateError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)


@router.delete("/{topic_id}", response_model=MessageResponse)
def remove_topic(
    topic_id: int,
    db: Session = Depends(get_db),
    admin: dict = Depends(admin_required),
):
    try:
        return delete_topic(db, topic_id)
    except AssessMateError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
