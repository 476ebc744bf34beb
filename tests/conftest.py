import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from assessmate.core.config import get_settings
from assessmate.infrastructure.db.base import Base
from assessmate.infrastructure.db import models  # noqa: F401
from assessmate.infrastructure.db.models import ADMIN_ROLE, UserModel
from assessmate.infrastructure.db.session import build_engine
from assessmate.infrastructure.repositories.student_repository import StudentRepository
from assessmate.infrastructure.security.jwt_service import create_access_token
from assessmate.main import create_app
from assessmate.presentation.dependencies import get_db
from assessmate.presentation.schemas.student_schema import StudentCreate

ADMIN_EMAIL = "admin@assessmate.com"
ADMIN_PASSWORD = "admin123"


@pytest.fixture
def engine():
    engine = build_engine("sqlite://", poolclass=StaticPool)
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db_session(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def student_repo(db_session):
    return StudentRepository(db_session)


@pytest.fixture
def make_student():
    def _make(index: int = 1, **overrides) -> StudentCreate:
        fields = dict(
            name=f"Student {index}",
            roll_no=f"R{index:03d}",
            year_of_study=2,
            department="CSE",
            college_name="Govt Engineering College",
            mobile_no=f"98765{index:05d}",
            email=f"student{index}@example.com",
            password=f"secret{index}",
        )
        fields.update(overrides)
        return StudentCreate(**fields)

    return _make


@pytest.fixture
def upload_dir(tmp_path, monkeypatch):
    target = tmp_path / "uploads"
    monkeypatch.setenv("UPLOAD_DIR", str(target))
    get_settings.cache_clear()
    yield target
    get_settings.cache_clear()


@pytest.fixture
def client(session_factory, upload_dir):
    app = create_app()

    def override_get_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    # Not used as a context manager, so the lifespan (real engine + seeded admin) never runs
    return TestClient(app)


@pytest.fixture
def admin_user(db_session):
    StudentRepository(db_session).ensure_default_admin(ADMIN_EMAIL, ADMIN_PASSWORD, "9999999999")
    return db_session.query(UserModel).filter(UserModel.user_role == ADMIN_ROLE).one()


@pytest.fixture
def admin_headers(admin_user):
    token = create_access_token(admin_user.id, admin_user.user_role, admin_user.email)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def student_user(db_session, student_repo, make_student):
    student_id = student_repo.add_student(make_student(900, name="Logged In Student"))
    return db_session.get(UserModel, student_id)


@pytest.fixture
def student_headers(student_user):
    token = create_access_token(student_user.id, student_user.user_role, student_user.email)
    return {"Authorization": f"Bearer {token}"}
