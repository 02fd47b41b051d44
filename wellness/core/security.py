from datetime import timedelta
from typing import Any, Dict, Optional
from jose import jwt
from jose.exceptions import JWTError
from passlib.context import CryptContext
from wellness.core.config import settings
from wellness.utils.timezone import utcnow_aware

# Export the algorithm constant for use in other modules
ALGORITHM = settings.ALGORITHM

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


def create_access_token(
    subject: Any,
    *,
    role: str,
    name: str,
    email: str,
    secret_key: str,
    expires_delta: Optional[timedelta] = None,
) -> str:
    if expires_delta:
        expire = utcnow_aware() + expires_delta
    else:
        expire = utcnow_aware() + timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)

    to_encode = {"exp": expire, "sub": str(subject), "role": role, "name": name, "email": email}
    return jwt.encode(to_encode, secret_key, algorithm=ALGORITHM)


def decode_access_token(token: str, secret_key: str) -> Dict[str, Any]:
    """Return the token claims; raises JWTError on a bad signature or expiry."""
    return jwt.decode(token, secret_key, algorithms=[ALGORITHM])


def verify_password(plain_password: str, hashed_password: Optional[str]) -> bool:
    if not hashed_password:
        return False
    try:
        return pwd_context.verify(plain_password, hashed_password)
    except ValueError:
        # Malformed hash in storage
        return False


def get_password_hash(password: str) -> str:
    return pwd_context.hash(password)


__all__ = [
    "ALGORITHM",
    "JWTError",
    "create_access_token",
    "decode_access_token",
    "verify_password",
    "get_password_hash",
]
