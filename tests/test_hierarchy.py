import pytest

from assessmate.core.exceptions import NotFoundError, ValidationError
from assessmate.infrastructure.db.models import Category, Question, Subject, Topic
from assessmate.infrastructure.repositories.category_repo_impl import (
    create_category,
    delete_category,
    get_all_categories,
    update_category,
)
from assessmate.infrastructure.repositories.subject_repo_impl import (
    create_subject,
    delete_subject,
    get_subjects_by_category,
    update_subject,
)
from assessmate.infrastructure.repositories.topic_repo_impl import (
    create_topic,
    delete_topic,
    get_topics_by_subject,
    update_topic,
)
from assessmate.infrastructure.repositories.question_repo_impl import create_question, get_question_by_id
from assessmate.presentation.schemas.category_schema import CategoryCreate
from assessmate.presentation.schemas.question_schema import QuestionCreate
from assessmate.presentation.schemas.subject_schema import SubjectCreate, SubjectUpdate
from assessmate.presentation.schemas.topic_schema import TopicCreate, TopicUpdate


@pytest.fixture
def tree(db_session):
    category = create_category(db_session, CategoryCreate(category_name="Software"))
    subject = create_subject(
        db_session, SubjectCreate(subject_name="C Programming", category_id=category.category_id)
    )
    topic = create_topic(db_session, TopicCreate(topic_name="Pointers", subject_id=subject.subject_id))
    question = create_question(
        db_session,
        QuestionCreate(
            topic_id=topic.topic_id,
            question_type="MCQ",
            question_text="Which pointer type can hold any address?",
            option_A="int*",
            option_B="char*",
            option_C="void*",
            option_D="float*",
            correct_answer="C",
        ),
    )
    return category, subject, topic, question


def test_categories_are_listed_by_name(db_session):
    for name in ("Software", "Hardware", "Aptitude"):
        create_category(db_session, CategoryCreate(category_name=name))

    names = [c.category_name for c in get_all_categories(db_session)]
    assert names == ["Aptitude", "Hardware", "Software"]


@pytest.mark.parametrize("name", [None, "", "   "])
def test_create_category_requires_name(db_session, name):
    with pytest.raises(ValidationError):
        create_category(db_session, CategoryCreate(category_name=name))


def test_duplicate_category_names_are_allowed(db_session):
    first = create_category(db_session, CategoryCreate(category_name="Software"))
    second = create_category(db_session, CategoryCreate(category_name="Software"))
    assert first.category_id != second.category_id


def test_create_subject_requires_parent_id(db_session):
    with pytest.raises(ValidationError, match="category ID"):
        create_subject(db_session, SubjectCreate(subject_name="Orphan"))


def test_create_subject_under_missing_category(db_session):
    with pytest.raises(NotFoundError):
        create_subject(db_session, SubjectCreate(subject_name="Orphan", category_id=999))


def test_create_topic_requires_name_and_subject(db_session, tree):
    _, subject, _, _ = tree
    with pytest.raises(ValidationError):
        create_topic(db_session, TopicCreate(topic_name="", subject_id=subject.subject_id))
    with pytest.raises(ValidationError):
        create_topic(db_session, TopicCreate(topic_name="Arrays"))


def test_children_are_listed_by_name(db_session, tree):
    category, subject, _, _ = tree
    create_subject(db_session, SubjectCreate(subject_name="Algorithms", category_id=category.category_id))
    create_topic(db_session, TopicCreate(topic_name="Arrays", subject_id=subject.subject_id))

    assert [s.subject_name for s in get_subjects_by_category(db_session, category.category_id)] == [
        "Algorithms",
        "C Programming",
    ]
    assert [t.topic_name for t in get_topics_by_subject(db_session, subject.subject_id)] == [
        "Arrays",
        "Pointers",
    ]
    assert get_subjects_by_category(db_session, 12345) == []


def test_rename_nodes(db_session, tree):
    category, subject, topic, _ = tree
    update_category(db_session, category.category_id, CategoryCreate(category_name="Programming"))
    update_subject(db_session, subject.subject_id, SubjectUpdate(subject_name="ANSI C"))
    update_topic(db_session, topic.topic_id, TopicUpdate(topic_name="Pointer Arithmetic"))

    db_session.expire_all()
    assert db_session.get(Category, category.category_id).category_name == "Programming"
    assert db_session.get(Subject, subject.subject_id).subject_name == "ANSI C"
    assert db_session.get(Topic, topic.topic_id).topic_name == "Pointer Arithmetic"


def test_update_missing_or_blank(db_session, tree):
    category, _, _, _ = tree
    with pytest.raises(NotFoundError):
        update_category(db_session, 999, CategoryCreate(category_name="Nope"))
    with pytest.raises(ValidationError):
        update_category(db_session, category.category_id, CategoryCreate(category_name=""))
    with pytest.raises(NotFoundError):
        update_subject(db_session, 999, SubjectUpdate(subject_name="Nope"))
    with pytest.raises(NotFoundError):
        update_topic(db_session, 999, TopicUpdate(topic_name="Nope"))


def test_delete_missing_nodes(db_session):
    with pytest.raises(NotFoundError):
        delete_category(db_session, 1)
    with pytest.raises(NotFoundError):
        delete_subject(db_session, 1)
    with pytest.raises(NotFoundError):
        delete_topic(db_session, 1)


def test_delete_category_removes_whole_subtree(db_session, tree):
    category, subject, topic, question = tree
    question_id = question.question_id

    result = delete_category(db_session, category.category_id)
    assert "permanently deleted" in result["message"]

    db_session.expire_all()
    assert db_session.query(Subject).count() == 0
    assert db_session.query(Topic).count() == 0
    assert db_session.query(Question).count() == 0
    with pytest.raises(NotFoundError):
        get_question_by_id(db_session, question_id)


def test_delete_topic_keeps_siblings(db_session, tree):
    _, subject, topic, _ = tree
    sibling = create_topic(db_session, TopicCreate(topic_name="Arrays", subject_id=subject.subject_id))

    delete_topic(db_session, topic.topic_id)

    db_session.expire_all()
    remaining = get_topics_by_subject(db_session, subject.subject_id)
    assert [t.topic_id for t in remaining] == [sibling.topic_id]
    assert db_session.query(Question).count() == 0
