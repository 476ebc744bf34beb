from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from assessmate.core.exceptions import AssessMateError
from assessmate.presentation.schemas.category_schema import (
    CategoryCreate,
    CategoryCreatedResponse,
    CategoryListResponse,
)
from assessmate.presentation.schemas.common_schema import MessageResponse
from assessmate.presentation.dependencies import get_db, admin_required, get_current_user
from assessmate.infrastructure.repositories.category_repo_impl import (
    create_category,
    get_all_categories,
    update_category,
    delete_category,
)
import logging

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/categories", tags=["Categories"])


@router.get("", response_model=CategoryListResponse)
def list_categories(db: Session = Depends(get_db), user: dict = Depends(get_current_user)):
    try:
        return {"categories": get_all_categories(db)}
    except AssessMateError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)


@router.post("", response_model=CategoryCreatedResponse, status_code=status.HTTP_201_CREATED)
def add_category(
    category: CategoryCreate,
    db: Session = Depends(get_db),
    admin: dict = Depends(admin_required),
):
    try:
        result = create_category(db, category)
        return {"message": "Category created successfully", "category_id": result.category_id}
    except AssessMateError as e:
        logger.warning(f"Admin {admin['user_id']} failed to create category: {e.message}")
        raise HTTPException(status_code=e.status_code, detail=e.message)


@router.put("/{category_id}", response_model=MessageResponse)
def modify_category(
    category_id: int,
    category: CategoryCreate,
    db: Session = Depends(get_db),
    admin: dict = Depends(admin_required),
):
    try:
        update_category(db, category_id, category)
        return {"message": "Category updated successfully"}
    except AssessMateError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)


@router.delete("/{category_id}", response_model=MessageResponse)
def remove_category(
    category_id: int,
    db: Session = Depends(get_db),
    admin: dict = Depends(admin_required),
):
    try:
        return delete_category(db, category_id)
    except AssessMateError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
