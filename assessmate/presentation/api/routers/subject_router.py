from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from assessmate.core.exceptions import AssessMateError
from assessmate.presentation.schemas.subject_schema import (
    SubjectCreate,
    SubjectCreatedResponse,
    SubjectListResponse,
    SubjectUpdate,
)
from assessmate.presentation.schemas.common_schema import MessageResponse
from assessmate.presentation.dependencies import get_db, admin_required, get_current_user
from assessmate.infrastructure.repositories.subject_repo_impl import (
    create_subject,
    get_subjects_by_category,
    update_subject,
    delete_subject,
)
import logging

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/subjects", tags=["Subjects"])


@router.get("/{category_id}", response_model=SubjectListResponse)
def list_subjects(
    category_id: int,
    db: Session = Depends(get_db),
    user: dict = Depends(get_current_user),
):
    try:
        return {"subjects": get_subjects_by_category(db, category_id)}
    except AssessMateError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)


@router.post("", response_model=SubjectCreatedResponse, status_code=status.HTTP_201_CREATED)
def add_subject(
    subject: SubjectCreate,
    db: Session = Depends(get_db),
    admin: dict = Depends(admin_required),
):
    try:
        result = create_subject(db, subject)
        return {"message": "Subject created successfully", "subject_id": result.subject_id}
    except AssessMateError as e:
        logger.warning(f"Admin {admin['user_id']} failed to create subject: {e.message}")
        raise HTTPException(status_code=e.status_code, detail=e.message)


@router.put("/{subject_id}", response_model=MessageResponse)
def modify_subject(
    subject_id: int,
    subject: SubjectUpdate,
    db: Session = Depends(get_db),
    admin: dict = Depends(admin_required),
):
    try:
        update_subject(db, subject_id, subject)
        return {"message": "Subject updated successfully"}
    except AssessMateError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)


@router.delete("/{subject_id}", response_model=MessageResponse)
def remove_subject(
    subject_id: int,
    db: Session = Depends(get_db),
    admin: dict = Depends(admin_required),
):
    try:
        return delete_subject(db, subject_id)
    except AssessMateError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
