from sqlalchemy.orm import Session
from sqlalchemy.exc import SQLAlchemyError
from assessmate.core.exceptions import NotFoundError, StorageError
from assessmate.core.validation import require_id, require_text
from assessmate.infrastructure.db.models.subject_model import Subject
from assessmate.infrastructure.repositories.category_repo_impl import get_category_by_id
from assessmate.presentation.schemas.subject_schema import SubjectCreate, SubjectUpdate
import logging

logger = logging.getLogger(__name__)


def create_subject(db: Session, subject_data: SubjectCreate) -> Subject:
    """Create a new subject under an existing category"""
    missing = "Subject name and category ID are required"
    name = require_text(subject_data.subject_name, missing)
    category_id = require_id(subject_data.category_id, missing)

    get_category_by_id(db, category_id)
    try:
        subject = Subject(subject_name=name, category_id=category_id)
        db.add(subject)
        db.commit()
        db.refresh(subject)
        logger.info(f"Created subject: {subject.subject_name} (ID: {subject.subject_id}) for category_id: {category_id}")
        return subject
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Database error creating subject: {e}", exc_info=True)
        raise StorageError()


def get_subjects_by_category(db: Session, category_id: int):
    """Get all subjects for a category ordered by name"""
    try:
        subjects = (
            db.query(Subject)
            .filter(Subject.category_id == category_id)
            .order_by(Subject.subject_name)
            .all()
        )
        logger.info(f"Retrieved {len(subjects)} subjects for category_id: {category_id}")
        return subjects
    except SQLAlchemyError as e:
        logger.error(f"Error fetching subjects for category_id {category_id}: {e}", exc_info=True)
        raise StorageError()


def get_subject_by_id(db: Session, subject_id: int) -> Subject:
    """Get a specific subject by ID"""
    try:
        subject = db.query(Subject).filter(Subject.subject_id == subject_id).first()
    except SQLAlchemyError as e:
        logger.error(f"Error fetching subject {subject_id}: {e}", exc_info=True)
        raise StorageError()
    if not subject:
        logger.warning(f"Subject with id {subject_id} not found")
        raise NotFoundError("Subject not found")
    return subject


def update_subject(db: Session, subject_id: int, subject_data: SubjectUpdate) -> Subject:
    """Rename a subject"""
    name = require_text(subject_data.subject_name, "Subject name is required")
    subject = get_subject_by_id(db, subject_id)
    try:
        subject.subject_name = name
        db.commit()
        db.refresh(subject)
        logger.info(f"Updated subject: {subject.subject_name} (ID: {subject_id})")
        return subject
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Database error updating subject {subject_id}: {e}", exc_info=True)
        raise StorageError()


def delete_subject(db: Session, subject_id: int):
    """Delete a subject and everything beneath it"""
    subject = get_subject_by_id(db, subject_id)
    subject_name = subject.subject_name
    try:
        db.delete(subject)
        db.commit()
        logger.info(f"Deleted subject: {subject_name} (ID: {subject_id})")
        return {"message": f"Subject '{subject_name}' and all of its topics and questions were permanently deleted"}
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Database error deleting subject {subject_id}: {e}", exc_info=True)
        raise StorageError()
