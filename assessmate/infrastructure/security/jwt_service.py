from datetime import datetime, timedelta, timezone
import logging

from jose import JWTError, jwt

from assessmate.core.config import get_settings
from assessmate.core.exceptions import AuthenticationError

logger = logging.getLogger(__name__)


def create_access_token(user_id: int, user_role: int, email: str) -> str:
    settings = get_settings()
    expire = datetime.now(timezone.utc) + timedelta(minutes=settings.JWT_EXPIRE_MINUTES)
    payload = {
        "sub": str(user_id),
        "user_role": user_role,
        "email": email,
        "exp": expire,
    }
    return jwt.encode(payload, settings.JWT_SECRET, algorithm=settings.JWT_ALGORITHM)


def decode_access_token(token: str) -> dict:
    settings = get_settings()
    try:
        payload = jwt.decode(token, settings.JWT_SECRET, algorithms=[settings.JWT_ALGORITHM])
    except JWTError as e:
        logger.warning(f"Token validation failed: {e}")
        raise AuthenticationError("Invalid or expired token")

    if not payload.get("sub"):
        raise AuthenticationError("Invalid token payload")
    return payload
