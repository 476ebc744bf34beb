from sqlalchemy.orm import Session
from sqlalchemy.exc import SQLAlchemyError
from assessmate.core.exceptions import NotFoundError, StorageError
from assessmate.core.validation import require_text
from assessmate.infrastructure.db.models.category_model import Category
from assessmate.presentation.schemas.category_schema import CategoryCreate
import logging

logger = logging.getLogger(__name__)


def create_category(db: Session, category_data: CategoryCreate) -> Category:
    """Create a new category"""
    name = require_text(category_data.category_name, "Category name is required")
    try:
        category = Category(category_name=name)
        db.add(category)
        db.commit()
        db.refresh(category)
        logger.info(f"Created category: {category.category_name} (ID: {category.category_id})")
        return category
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Database error creating category: {e}", exc_info=True)
        raise StorageError()


def get_all_categories(db: Session):
    """Get all categories ordered by name"""
    try:
        categories = db.query(Category).order_by(Category.category_name).all()
        logger.info(f"Retrieved {len(categories)} categories")
        return categories
    except SQLAlchemyError as e:
        logger.error(f"Error fetching categories: {e}", exc_info=True)
        raise StorageError()


def get_category_by_id(db: Session, category_id: int) -> Category:
    try:
        category = db.query(Category).filter(Category.category_id == category_id).first()
    except SQLAlchemyError as e:
        logger.error(f"Error fetching category {category_id}: {e}", exc_info=True)
        raise StorageError()
    if not category:
        logger.warning(f"Category with id {category_id} not found")
        raise NotFoundError("Category not found")
    return category


def update_category(db: Session, category_id: int, category_data: CategoryCreate) -> Category:
    """Rename a category in place"""
    name = require_text(category_data.category_name, "Category name is required")
    category = get_category_by_id(db, category_id)
    try:
        category.category_name = name
        db.commit()
        db.refresh(category)
        logger.info(f"Updated category: {category.category_name} (ID: {category_id})")
        return category
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Database error updating category {category_id}: {e}", exc_info=True)
        raise StorageError()


def delete_category(db: Session, category_id: int):
    """Delete a category together with its subjects, topics and questions"""
    category = get_category_by_id(db, category_id)
    category_name = category.category_name
    try:
        db.delete(category)
        db.commit()
        logger.info(f"Deleted category: {category_name} (ID: {category_id}) and its subtree")
        return {"message": f"Category '{category_name}' and all of its subjects, topics and questions were permanently deleted"}
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Database error deleting category {category_id}: {e}", exc_info=True)
        raise StorageError()
