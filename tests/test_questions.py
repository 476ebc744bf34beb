import pytest

from assessmate.core.exceptions import NotFoundError, ValidationError
from assessmate.infrastructure.db.models import ProgrammingQuestion
from assessmate.infrastructure.repositories.category_repo_impl import create_category
from assessmate.infrastructure.repositories.question_repo_impl import (
    create_question,
    get_question_by_id,
    get_questions_by_topic,
)
from assessmate.infrastructure.repositories.subject_repo_impl import create_subject
from assessmate.infrastructure.repositories.topic_repo_impl import create_topic
from assessmate.presentation.schemas.category_schema import CategoryCreate
from assessmate.presentation.schemas.question_schema import QuestionCreate
from assessmate.presentation.schemas.subject_schema import SubjectCreate
from assessmate.presentation.schemas.topic_schema import TopicCreate


@pytest.fixture
def topic(db_session):
    category = create_category(db_session, CategoryCreate(category_name="Software"))
    subject = create_subject(
        db_session, SubjectCreate(subject_name="C Programming", category_id=category.category_id)
    )
    return create_topic(db_session, TopicCreate(topic_name="Pointers", subject_id=subject.subject_id))


def mcq_payload(topic_id, /, **overrides):
    payload = dict(
        topic_id=topic_id,
        question_type="MCQ",
        question_text="Which pointer type can point to any data type?",
        option_A="int*",
        option_B="char*",
        option_C="void*",
        option_D="float*",
        correct_answer="C",
    )
    payload.update(overrides)
    return QuestionCreate(**payload)


def test_mcq_missing_option_fails_then_succeeds(db_session, topic):
    with pytest.raises(ValidationError, match="Option B"):
        create_question(db_session, mcq_payload(topic.topic_id, option_B=None))

    question = create_question(db_session, mcq_payload(topic.topic_id))
    fetched = get_question_by_id(db_session, question.question_id)

    assert fetched.answer == fetched.correct_answer == "C"
    assert fetched.flowchart_image is None


def test_mcq_answer_must_be_a_letter(db_session, topic):
    with pytest.raises(ValidationError):
        create_question(db_session, mcq_payload(topic.topic_id, correct_answer="E"))

    question = create_question(db_session, mcq_payload(topic.topic_id, correct_answer="b"))
    assert question.correct_answer == "B"


def test_flowchart_round_trip(db_session, topic):
    image = "/uploads/flowcharts/flowchart-1700000000000-42.png"
    question = create_question(
        db_session,
        QuestionCreate(
            topic_id=topic.topic_id,
            question_type="Flowchart",
            question_text="What does this flowchart print?",
            flowchart_image=image,
            correct_answer="1 2 3",
            # MCQ fields are ignored for flowcharts
            option_A="ignored",
        ),
    )

    fetched = get_question_by_id(db_session, question.question_id)
    assert fetched.flowchart_image == image
    assert fetched.answer == "1 2 3"
    assert fetched.option_A is None


@pytest.mark.parametrize(
    "overrides",
    [
        {"flowchart_image": None, "correct_answer": "42"},
        {"flowchart_image": "/uploads/flowcharts/a.png", "correct_answer": "  "},
    ],
)
def test_flowchart_requires_image_and_answer(db_session, topic, overrides):
    payload = QuestionCreate(
        topic_id=topic.topic_id,
        question_type="Flowchart",
        question_text="Trace it",
        **overrides,
    )
    with pytest.raises(ValidationError):
        create_question(db_session, payload)


def test_programming_question_gets_satellite_row(db_session, topic):
    question = create_question(
        db_session,
        QuestionCreate(
            topic_id=topic.topic_id,
            question_type="Programming",
            question_text="Print hello world",
            language="C",
            starter_code="int main(void) {\n}\n",
            expected_output="hello world",
            correct_answer="ignored",
        ),
    )

    fetched = get_question_by_id(db_session, question.question_id)
    assert fetched.correct_answer is None
    assert fetched.language == "C"
    assert fetched.answer == "hello world"
    assert db_session.query(ProgrammingQuestion).count() == 1


def test_programming_language_is_checked(db_session, topic):
    payload = QuestionCreate(
        topic_id=topic.topic_id,
        question_type="Programming",
        question_text="Print hello world",
        language="COBOL",
    )
    with pytest.raises(ValidationError, match="Language"):
        create_question(db_session, payload)


@pytest.mark.parametrize(
    "overrides",
    [{"topic_id": None}, {"question_type": None}, {"question_type": "Essay"}, {"question_text": ""}],
)
def test_create_question_rejects_bad_envelope(db_session, topic, overrides):
    with pytest.raises(ValidationError):
        create_question(db_session, mcq_payload(topic.topic_id, **overrides))


def test_create_question_for_missing_topic(db_session):
    with pytest.raises(NotFoundError):
        create_question(db_session, mcq_payload(404))


def test_questions_by_topic_newest_first(db_session, topic):
    first = create_question(db_session, mcq_payload(topic.topic_id, question_text="first"))
    second = create_question(
        db_session,
        QuestionCreate(
            topic_id=topic.topic_id,
            question_type="Programming",
            question_text="second",
            language="Python",
            expected_output="42",
        ),
    )

    questions = get_questions_by_topic(db_session, topic.topic_id)
    assert [q.question_id for q in questions] == [second.question_id, first.question_id]
    assert questions[0].language == "Python"
    assert questions[1].language is None
    assert get_questions_by_topic(db_session, 9999) == []


def test_get_missing_question(db_session):
    with pytest.raises(NotFoundError):
        get_question_by_id(db_session, 1)


def test_authoring_scenario(db_session):
    category = create_category(db_session, CategoryCreate(category_name="Software"))
    subject = create_subject(
        db_session, SubjectCreate(subject_name="C Programming", category_id=category.category_id)
    )
    pointers = create_topic(db_session, TopicCreate(topic_name="Pointers", subject_id=subject.subject_id))
    create_question(db_session, mcq_payload(pointers.topic_id))

    questions = get_questions_by_topic(db_session, pointers.topic_id)
    assert len(questions) == 1
    assert questions[0].answer == "C"
    assert [questions[0].option_A, questions[0].option_B, questions[0].option_C, questions[0].option_D] == [
        "int*",
        "char*",
        "void*",
        "float*",
    ]
