from assessmate.infrastructure.db.session import SessionLocal
from fastapi import Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer
from assessmate.core.exceptions import AuthenticationError, StorageError
from assessmate.infrastructure.security.jwt_service import decode_access_token
import logging
from assessmate.infrastructure.db.models.user_model import ADMIN_ROLE, UserModel
from assessmate.infrastructure.repositories.student_repository import StudentRepository
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

logger = logging.getLogger(__name__)

# auto_error=False so a missing token yields our own JSON 401 body
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/login", auto_error=False)


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def get_student_repository(db: Session = Depends(get_db)) -> StudentRepository:
    return StudentRepository(db)


def get_current_user(
    token: str = Depends(oauth2_scheme),
    db: Session = Depends(get_db),
) -> dict:
    if not token:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )

    try:
        payload = decode_access_token(token)
        user_id = int(payload["sub"])
    except AuthenticationError as e:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=e.message,
            headers={"WWW-Authenticate": "Bearer"},
        )
    except ValueError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid token payload",
            headers={"WWW-Authenticate": "Bearer"},
        )

    # Verify the user still exists; roles are never trusted from the token alone
    try:
        user = db.query(UserModel).filter(UserModel.id == user_id).first()
    except SQLAlchemyError as e:
        logger.error(f"Error loading user {user_id} for token: {e}", exc_info=True)
        raise StorageError()

    if not user:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="User not found",
            headers={"WWW-Authenticate": "Bearer"},
        )

    logger.debug(f"Validated token for user_id: {user.id}")
    return {
        "user_id": user.id,
        "user_role": user.user_role,
    }


def admin_required(current_user: dict = Depends(get_current_user)) -> dict:
    if current_user.get("user_role") != ADMIN_ROLE:
        logger.warning(
            f"Access denied for non-admin user_id: {current_user.get('user_id')}"
        )
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Administrative privileges required",
        )
    return current_user
