import logging
import math
from typing import List, Optional

from sqlalchemy import delete, func, or_, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from assessmate.core.exceptions import ConflictError, NotFoundError, StorageError, ValidationError
from assessmate.core.validation import is_blank
from assessmate.infrastructure.db.models.user_model import ADMIN_ROLE, STUDENT_ROLE, UserModel
from assessmate.infrastructure.security.password_service import hash_password, verify_password
from assessmate.presentation.schemas.student_schema import StudentCreate, StudentUpdate

logger = logging.getLogger(__name__)

STUDENT_FIELDS = (
    "name",
    "roll_no",
    "year_of_study",
    "department",
    "college_name",
    "mobile_no",
    "email",
    "password",
)
# Everything except the password, which is optional on update
PROFILE_FIELDS = STUDENT_FIELDS[:-1]

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 10
MAX_LIMIT = 100


def normalize_page_params(page, limit):
    """Parse raw page/limit values, falling back to 1 and 10; limit is capped at 100."""

    def _to_positive_int(value, default):
        try:
            number = int(value)
        except (TypeError, ValueError):
            return default
        return number if number > 0 else default

    return _to_positive_int(page, DEFAULT_PAGE), min(_to_positive_int(limit, DEFAULT_LIMIT), MAX_LIMIT)


def _coerce_year(value, message: str = "Year of study must be a number") -> int:
    try:
        number = float(str(value).strip())
    except (TypeError, ValueError):
        raise ValidationError(message)
    # Spreadsheets hand back 2.0 for 2
    if not number.is_integer():
        raise ValidationError(message)
    return int(number)


def _clean(value) -> str:
    return str(value).strip()


class StudentRepository:
    def __init__(self, db: Session):
        self.db = db

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------
    def _students(self):
        return self.db.query(UserModel).filter(UserModel.user_role == STUDENT_ROLE)

    def _page(self, query, page, limit) -> dict:
        page, limit = normalize_page_params(page, limit)
        total = query.order_by(None).count()
        total_pages = math.ceil(total / limit)

        # Pages past the end skip the offset query
        students = []
        if page <= total_pages:
            students = (
                query.order_by(UserModel.created_at.desc(), UserModel.id.desc())
                .limit(limit)
                .offset((page - 1) * limit)
                .all()
            )

        return {
            "students": students,
            "pagination": {
                "currentPage": page,
                "totalPages": total_pages,
                "totalStudents": total,
                "hasNext": page < total_pages,
                "hasPrev": page > 1,
            },
        }

    def count_students(self) -> int:
        try:
            count = (
                self.db.query(func.count(UserModel.id))
                .filter(UserModel.user_role == STUDENT_ROLE)
                .scalar()
            )
            logger.info(f"Counted {count} students")
            return count
        except SQLAlchemyError as e:
            logger.error(f"Count query error: {e}", exc_info=True)
            raise StorageError()

    def list_students(self, page=None, limit=None) -> dict:
        try:
            result = self._page(self._students(), page, limit)
            logger.info(
                f"Fetched {len(result['students'])} students for page {result['pagination']['currentPage']}"
            )
            return result
        except SQLAlchemyError as e:
            logger.error(f"Students query error: {e}", exc_info=True)
            raise StorageError()

    def search_students(self, term: Optional[str], page=None, limit=None) -> dict:
        if is_blank(term):
            raise ValidationError("Search term is required")
        term = term.strip()
        try:
            query = self._students().filter(UserModel.name.ilike(f"%{term}%"))
            result = self._page(query, page, limit)
            logger.info(f"Search '{term}' matched {result['pagination']['totalStudents']} students")
            return result
        except SQLAlchemyError as e:
            logger.error(f"Search query error: {e}", exc_info=True)
            raise StorageError()

    def get_by_id(self, user_id: int) -> UserModel:
        try:
            user = self.db.query(UserModel).filter(UserModel.id == user_id).first()
        except SQLAlchemyError as e:
            logger.error(f"Profile query error: {e}", exc_info=True)
            raise StorageError()
        if not user:
            logger.warning(f"User not found: user_id={user_id}")
            raise NotFoundError("User not found")
        return user

    def authenticate(self, email: str, password: str) -> Optional[UserModel]:
        try:
            user = self.db.query(UserModel).filter(UserModel.email == email.strip()).first()
        except SQLAlchemyError as e:
            logger.error(f"Login query error: {e}", exc_info=True)
            raise StorageError()
        if not user or not verify_password(password, user.password):
            logger.warning(f"Failed login attempt for {email}")
            return None
        return user

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------
    def add_student(self, data: StudentCreate) -> int:
        for field in STUDENT_FIELDS:
            if is_blank(getattr(data, field)):
                raise ValidationError("All fields are required")

        email = _clean(data.email)
        roll_no = _clean(data.roll_no)
        year_of_study = _coerce_year(data.year_of_study)

        try:
            duplicate = (
                self.db.query(UserModel.email, UserModel.roll_no)
                .filter(or_(UserModel.email == email, UserModel.roll_no == roll_no))
                .first()
            )
        except SQLAlchemyError as e:
            logger.error(f"Check duplicate error: {e}", exc_info=True)
            raise StorageError()

        if duplicate:
            logger.warning(f"Duplicate student rejected: email={email} roll_no={roll_no}")
            if duplicate.email == email:
                raise ConflictError("Email already exists")
            raise ConflictError("Roll number already exists")

        student = UserModel(
            name=_clean(data.name),
            roll_no=roll_no,
            year_of_study=year_of_study,
            department=_clean(data.department),
            college_name=_clean(data.college_name),
            mobile_no=_clean(data.mobile_no),
            email=email,
            password=hash_password(data.password),
            user_role=STUDENT_ROLE,
        )
        try:
            self.db.add(student)
            self.db.commit()
            self.db.refresh(student)
        except IntegrityError as e:
            # Lost a race with a concurrent insert; the unique constraint is the real guard
            self.db.rollback()
            logger.warning(f"Insert student hit unique constraint: {e}")
            raise ConflictError("Duplicate entry found")
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Insert student error: {e}", exc_info=True)
            raise StorageError()

        logger.info(f"Added student {student.id} ({student.roll_no})")
        return student.id

    def add_students_bulk(self, students: Optional[List[StudentCreate]]) -> int:
        """Insert a batch of students atomically.

        Any missing field, duplicate inside the batch, or clash with an
        existing row rejects the whole batch; nothing is inserted.
        """
        if not students:
            raise ValidationError("Invalid students data")

        for index, student in enumerate(students, start=1):
            for field in STUDENT_FIELDS:
                if is_blank(getattr(student, field)):
                    raise ValidationError(f"Missing {field} for student at row {index}")

        rows = []
        seen_emails, seen_rolls = set(), set()
        for index, student in enumerate(students, start=1):
            email = _clean(student.email)
            roll_no = _clean(student.roll_no)
            if email in seen_emails or roll_no in seen_rolls:
                raise ConflictError(f"Duplicate email or roll number for student at row {index}")
            seen_emails.add(email)
            seen_rolls.add(roll_no)
            rows.append(
                dict(
                    name=_clean(student.name),
                    roll_no=roll_no,
                    year_of_study=_coerce_year(
                        student.year_of_study, f"Invalid year_of_study for student at row {index}"
                    ),
                    department=_clean(student.department),
                    college_name=_clean(student.college_name),
                    mobile_no=_clean(student.mobile_no),
                    email=email,
                    password=student.password,
                )
            )

        try:
            existing = (
                self.db.query(UserModel.id)
                .filter(or_(UserModel.email.in_(seen_emails), UserModel.roll_no.in_(seen_rolls)))
                .first()
            )
        except SQLAlchemyError as e:
            logger.error(f"Bulk duplicate check error: {e}", exc_info=True)
            raise StorageError()
        if existing:
            logger.warning("Bulk insert rejected: batch clashes with existing students")
            raise ConflictError("Duplicate entry found. Please check email addresses and roll numbers.")

        users = [
            UserModel(**{**row, "password": hash_password(row["password"])}, user_role=STUDENT_ROLE)
            for row in rows
        ]
        try:
            self.db.add_all(users)
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            logger.warning(f"Bulk insert hit unique constraint: {e}")
            raise ConflictError("Duplicate entry found. Please check email addresses and roll numbers.")
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Bulk insert error: {e}", exc_info=True)
            raise StorageError()

        logger.info(f"Bulk inserted {len(users)} students")
        return len(users)

    def update_student(self, student_id: int, data: StudentUpdate) -> None:
        for field in PROFILE_FIELDS:
            if is_blank(getattr(data, field)):
                raise ValidationError("All fields except password are required")

        email = _clean(data.email)
        roll_no = _clean(data.roll_no)
        year_of_study = _coerce_year(data.year_of_study)

        try:
            exists = self._students().filter(UserModel.id == student_id).first()
            if not exists:
                logger.warning(f"Update rejected, student {student_id} not found")
                raise NotFoundError("Student not found")

            duplicate = (
                self.db.query(UserModel.id)
                .filter(or_(UserModel.email == email, UserModel.roll_no == roll_no))
                .filter(UserModel.id != student_id)
                .first()
            )
        except SQLAlchemyError as e:
            logger.error(f"Check student error: {e}", exc_info=True)
            raise StorageError()

        if duplicate:
            logger.warning(f"Update of student {student_id} clashes with user {duplicate.id}")
            raise ConflictError("Email or roll number already exists")

        values = dict(
            name=_clean(data.name),
            roll_no=roll_no,
            year_of_study=year_of_study,
            department=_clean(data.department),
            college_name=_clean(data.college_name),
            mobile_no=_clean(data.mobile_no),
            email=email,
        )
        # The password column only appears in SET when a new one is supplied
        if not is_blank(data.password):
            values["password"] = hash_password(data.password)

        statement = (
            update(UserModel)
            .where(UserModel.id == student_id, UserModel.user_role == STUDENT_ROLE)
            .values(**values)
            .execution_options(synchronize_session=False)
        )
        try:
            result = self.db.execute(statement)
            if result.rowcount == 0:
                self.db.rollback()
                logger.warning(f"Update of student {student_id} affected no rows")
                raise NotFoundError("Student not found or no changes made")
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            logger.warning(f"Update student hit unique constraint: {e}")
            raise ConflictError("Email or roll number already exists")
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Update student error: {e}", exc_info=True)
            raise StorageError()

        self.db.expire_all()
        logger.info(f"Updated student {student_id} (password changed: {'password' in values})")

    def delete_student(self, student_id: int) -> None:
        statement = (
            delete(UserModel)
            .where(UserModel.id == student_id, UserModel.user_role == STUDENT_ROLE)
            .execution_options(synchronize_session=False)
        )
        try:
            result = self.db.execute(statement)
            if result.rowcount == 0:
                self.db.rollback()
                logger.warning(f"Delete rejected, student {student_id} not found")
                raise NotFoundError("Student not found")
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Delete student error: {e}", exc_info=True)
            raise StorageError()

        self.db.expire_all()
        logger.info(f"Deleted student {student_id}")

    def ensure_default_admin(self, email: str, password: str, mobile_no: str) -> bool:
        """Create the seeded admin account when no admin exists yet."""
        try:
            admin = self.db.query(UserModel.id).filter(UserModel.user_role == ADMIN_ROLE).first()
            if admin:
                return False
            taken = self.db.query(UserModel.id).filter(UserModel.email == email).first()
            if taken:
                logger.warning(f"Default admin not created: {email} already belongs to user {taken.id}")
                return False
            self.db.add(
                UserModel(
                    name="Admin",
                    email=email,
                    password=hash_password(password),
                    mobile_no=mobile_no,
                    user_role=ADMIN_ROLE,
                )
            )
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Error creating admin user: {e}", exc_info=True)
            raise StorageError()
        logger.info(f"Default admin user created: {email}")
        return True
