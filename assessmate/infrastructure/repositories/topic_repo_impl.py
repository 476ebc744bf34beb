from sqlalchemy.orm import Session
from sqlalchemy.exc import SQLAlchemyError
from assessmate.core.exceptions import NotFoundError, StorageError
from assessmate.core.validation import require_id, require_text
from assessmate.infrastructure.db.models.topic_model import Topic
from assessmate.infrastructure.repositories.subject_repo_impl import get_subject_by_id
from assessmate.presentation.schemas.topic_schema import TopicCreate, TopicUpdate
import logging

logger = logging.getLogger(__name__)


def create_topic(db: Session, topic_data: TopicCreate) -> Topic:
    """Create a new topic"""
    missing = "Topic name and subject ID are required"
    name = require_text(topic_data.topic_name, missing)
    subject_id = require_id(topic_data.subject_id, missing)

    get_subject_by_id(db, subject_id)
    try:
        topic = Topic(topic_name=name, subject_id=subject_id)
        db.add(topic)
        db.commit()
        db.refresh(topic)
        logger.info(f"Created topic: {topic.topic_name} (ID: {topic.topic_id}) for subject_id: {subject_id}")
        return topic
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Database error creating topic: {e}", exc_info=True)
        raise StorageError()


def get_topics_by_subject(db: Session, subject_id: int):
    """Get all topics for a specific subject"""
    try:
        topics = (
            db.query(Topic)
            .filter(Topic.subject_id == subject_id)
            .order_by(Topic.topic_name)
            .all()
        )
        logger.info(f"Retrieved {len(topics)} topics for subject_id: {subject_id}")
        return topics
    except SQLAlchemyError as e:
        logger.error(f"Error fetching topics for subject_id {subject_id}: {e}", exc_info=True)
        raise StorageError()


def get_topic_by_id(db: Session, topic_id: int) -> Topic:
    """Get a specific topic by ID"""
    try:
        topic = db.query(Topic).filter(Topic.topic_id == topic_id).first()
    except SQLAlchemyError as e:
        logger.error(f"Error fetching topic {topic_id}: {e}", exc_info=True)
        raise StorageError()
    if not topic:
        logger.warning(f"Topic with id {topic_id} not found")
        raise NotFoundError("Topic not found")
    return topic


def update_topic(db: Session, topic_id: int, topic_data: TopicUpdate) -> Topic:
    """Update a topic"""
    name = require_text(topic_data.topic_name, "Topic name is required")
    topic = get_topic_by_id(db, topic_id)
    try:
        topic.topic_name = name
        db.commit()
        db.refresh(topic)
        logger.info(f"Updated topic: {topic.topic_name} (ID: {topic_id})")
        return topic
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Database error updating topic {topic_id}: {e}", exc_info=True)
        raise StorageError()


def delete_topic(db: Session, topic_id: int):
    """Delete a topic and its questions"""
    topic = get_topic_by_id(db, topic_id)
    topic_name = topic.topic_name
    try:
        db.delete(topic)
        db.commit()
        logger.info(f"Deleted topic: {topic_name} (ID: {topic_id})")
        return {"message": f"Topic '{topic_name}' and all of its questions were permanently deleted"}
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Database error deleting topic {topic_id}: {e}", exc_info=True)
        raise StorageError()
