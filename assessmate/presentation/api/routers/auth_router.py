from fastapi import APIRouter, Depends, HTTPException, status
from assessmate.core.exceptions import AssessMateError, PermissionDeniedError
from assessmate.core.validation import is_blank
from assessmate.infrastructure.db.models.user_model import ADMIN_ROLE
from assessmate.infrastructure.repositories.student_repository import StudentRepository
from assessmate.infrastructure.security.jwt_service import create_access_token
from assessmate.presentation.dependencies import get_current_user, get_student_repository
from assessmate.presentation.schemas.student_schema import StudentCreate, StudentCreatedResponse
from assessmate.presentation.schemas.user_schema import LoginRequest, LoginResponse, ProfileResponse
import logging

logger = logging.getLogger(__name__)
router = APIRouter(tags=["Authentication"])


@router.post("/login", response_model=LoginResponse)
def login(
    credentials: LoginRequest,
    repo: StudentRepository = Depends(get_student_repository),
):
    if is_blank(credentials.email) or is_blank(credentials.password):
        raise HTTPException(status_code=400, detail="Email and password are required")

    try:
        user = repo.authenticate(credentials.email, credentials.password)
    except AssessMateError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)

    if not user:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid email or password")

    logger.info(f"User {user.id} logged in (role {user.user_role})")
    return {
        "message": "Login successful",
        "user": user,
        "access_token": create_access_token(user.id, user.user_role, user.email),
    }


@router.post("/register", response_model=StudentCreatedResponse, status_code=status.HTTP_201_CREATED)
def register(
    student: StudentCreate,
    repo: StudentRepository = Depends(get_student_repository),
):
    """Self-registration; follows the same rules as an admin adding a student."""
    try:
        student_id = repo.add_student(student)
        return {"message": "Registration successful", "studentId": student_id}
    except AssessMateError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)


@router.get("/profile/{user_id}", response_model=ProfileResponse)
def get_profile(
    user_id: int,
    current_user: dict = Depends(get_current_user),
    repo: StudentRepository = Depends(get_student_repository),
):
    try:
        if current_user["user_id"] != user_id and current_user["user_role"] != ADMIN_ROLE:
            logger.warning(f"User {current_user['user_id']} tried to read profile {user_id}")
            raise PermissionDeniedError("You can only view your own profile")
        return {"user": repo.get_by_id(user_id)}
    except AssessMateError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
