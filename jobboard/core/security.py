import hashlib
from datetime import datetime, timedelta, timezone
from uuid import uuid4

import bcrypt
from jose import JWTError, jwt

from jobboard.config import settings

ACCESS_TOKEN_TYPE = "access"


def _digest(password: str) -> bytes:
    # bcrypt caps input at 72 bytes; a fixed-size digest keeps long passwords distinct.
    return hashlib.sha256(password.encode()).digest()


def hash_password(password: str) -> str:
    salt = bcrypt.gensalt(rounds=settings.bcrypt_rounds)
    return bcrypt.hashpw(_digest(password), salt).decode()


def verify_password(plain: str, hashed: str) -> bool:
    """False on mismatch and on a stored value that is not a bcrypt hash."""
    try:
        return bcrypt.checkpw(_digest(plain), hashed.encode())
    except ValueError:
        return False


def create_access_token(user_id: str, expires_minutes: int | None = None) -> str:
    if expires_minutes is None:
        expires_minutes = settings.access_token_expire_minutes
    issued_at = datetime.now(timezone.utc)
    claims = {
        "sub": user_id,
        "typ": ACCESS_TOKEN_TYPE,
        "iat": issued_at,
        "exp": issued_at + timedelta(minutes=expires_minutes),
    }
    return jwt.encode(claims, settings.secret_key, algorithm=settings.algorithm)


def decode_access_token(token: str) -> str | None:
    """User id carried by a valid access token; None when expired, forged or malformed."""
    try:
        claims = jwt.decode(token, settings.secret_key, algorithms=[settings.algorithm])
    except JWTError:
        return None
    if claims.get("typ") != ACCESS_TOKEN_TYPE:
        return None
    user_id = claims.get("sub")
    if not isinstance(user_id, str) or not user_id:
        return None
    return user_id


def generate_id() -> str:
    return str(uuid4())
