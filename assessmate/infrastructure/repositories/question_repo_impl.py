from assessmate.infrastructure.db.models.question_model import Question, ProgrammingQuestion
from assessmate.infrastructure.repositories.topic_repo_impl import get_topic_by_id
from assessmate.application.questions.question_variants import build_question_content
from assessmate.core.exceptions import NotFoundError, StorageError, ValidationError
from assessmate.core.validation import is_blank, require_text
from assessmate.presentation.schemas.question_schema import QuestionCreate
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, contains_eager, selectinload
import logging

logger = logging.getLogger(__name__)


def create_question(db: Session, question_data: QuestionCreate) -> Question:
    if question_data.topic_id is None or is_blank(question_data.question_type):
        raise ValidationError("Topic ID and question type are required")

    question_text = require_text(question_data.question_text, "Question text is required")
    content = build_question_content(question_data)
    question_type = question_data.question_type.strip()

    get_topic_by_id(db, question_data.topic_id)
    try:
        logger.info(f"Creating {question_type} question for topic {question_data.topic_id}")
        question = Question(
            topic_id=question_data.topic_id,
            question_type=question_type,
            question_text=question_text,
            **content.question_columns(),
        )
        satellite = content.satellite_columns()
        if satellite is not None:
            question.programming = ProgrammingQuestion(**satellite)

        db.add(question)
        db.commit()
        db.refresh(question)
        logger.info(f"Successfully committed question {question.question_id} to database")
        return question
    except SQLAlchemyError as e:
        logger.error(f"Database error during question creation: {e}", exc_info=True)
        db.rollback()
        raise StorageError()


def get_questions_by_topic(db: Session, topic_id: int):
    """Questions for a topic, newest first, with programming fields joined in"""
    try:
        questions = (
            db.query(Question)
            .outerjoin(Question.programming)
            .options(contains_eager(Question.programming))
            .filter(Question.topic_id == topic_id)
            .order_by(Question.created_at.desc(), Question.question_id.desc())
            .all()
        )
        logger.info(f"Retrieved {len(questions)} questions for topic_id={topic_id}")
        return questions
    except SQLAlchemyError as e:
        logger.error(f"Error fetching questions for topic_id {topic_id}: {e}", exc_info=True)
        raise StorageError()


def get_question_by_id(db: Session, question_id: int) -> Question:
    try:
        question = (
            db.query(Question)
            .options(selectinload(Question.programming))
            .filter(Question.question_id == question_id)
            .first()
        )
    except SQLAlchemyError as e:
        logger.error(f"Error fetching question {question_id}: {e}", exc_info=True)
        raise StorageError()
    if not question:
        logger.warning(f"Question not found: question_id={question_id}")
        raise NotFoundError("Question not found")
    return question
