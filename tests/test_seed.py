from assessmate.infrastructure.db.models import Category, Subject, Topic
from assessmate.infrastructure.db.seed import CATALOG, seed_catalog
from assessmate.infrastructure.repositories.subject_repo_impl import get_subjects_by_category

SMALL_CATALOG = {
    "Software": {"C Programming": ["Pointers", "Arrays"], "Algorithms": []},
    "Hardware": {"Digital Electronics": ["Logic Gates"]},
}


def test_seed_inserts_catalog(db_session):
    added = seed_catalog(db_session, SMALL_CATALOG)

    assert added == {"categories": 2, "subjects": 3, "topics": 3}
    software = db_session.query(Category).filter_by(category_name="Software").one()
    names = [s.subject_name for s in get_subjects_by_category(db_session, software.category_id)]
    assert names == ["Algorithms", "C Programming"]


def test_seed_is_idempotent(db_session):
    seed_catalog(db_session, SMALL_CATALOG)
    again = seed_catalog(db_session, SMALL_CATALOG)

    assert again == {"categories": 0, "subjects": 0, "topics": 0}
    assert db_session.query(Topic).count() == 3


def test_seed_fills_gaps(db_session):
    seed_catalog(db_session, {"Software": {"C Programming": ["Pointers"]}})
    added = seed_catalog(db_session, SMALL_CATALOG)

    assert added == {"categories": 1, "subjects": 2, "topics": 2}


def test_default_catalog(db_session):
    added = seed_catalog(db_session)

    assert added["categories"] == len(CATALOG)
    assert db_session.query(Subject).count() == sum(len(subjects) for subjects in CATALOG.values())
    assert db_session.query(Topic).count() == sum(
        len(topics) for subjects in CATALOG.values() for topics in subjects.values()
    )
