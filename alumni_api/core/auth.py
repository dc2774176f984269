"""
Authentication Utility - JWT and Password handling.

Provides:
- Password hashing with bcrypt
- JWT token creation/verification (TokenManager, built from Settings)
- FastAPI dependencies for protected routes
"""

from datetime import datetime, timedelta
from typing import Optional
from jose import JWTError, jwt
from passlib.context import CryptContext
from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from bson import ObjectId
from pymongo.database import Database

from alumni_api.core.config import Settings, get_settings
from alumni_api.core.errors import UnauthorizedError, ForbiddenError
from alumni_api.db.mongodb import get_mongo_db, db_operation
from alumni_api.schemas.schemas import CurrentUser, UserRole
from alumni_api.services.mongo_service import UserCollection

# Password hashing
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")

# Bearer token extractor; a missing header is reported as 401 by get_current_user
bearer_scheme = HTTPBearer(auto_error=False)


def hash_password(password: str) -> str:
    """Hash password with bcrypt."""
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify password against hash."""
    try:
        return pwd_context.verify(plain_password, hashed_password)
    except ValueError:
        # unknown / corrupted hash format
        return False


class TokenManager:
    """Signs and verifies access tokens with a secret handed in at construction."""

    def __init__(self, secret_key: str, algorithm: str = "HS256", expire_minutes: int = 1440):
        self._secret_key = secret_key
        self.algorithm = algorithm
        self.expire_minutes = expire_minutes

    @classmethod
    def from_settings(cls, settings: Settings) -> "TokenManager":
        return cls(settings.jwt_secret_key, settings.jwt_algorithm, settings.jwt_expire_minutes)

    def create_access_token(
        self, user_id: str, username: str, role: str, expires_delta: Optional[timedelta] = None
    ) -> str:
        """Create JWT access token."""
        now = datetime.utcnow()
        expire = now + (expires_delta or timedelta(minutes=self.expire_minutes))
        claims = {"sub": str(user_id), "username": username, "role": role, "iat": now, "exp": expire}
        return jwt.encode(claims, self._secret_key, algorithm=self.algorithm)

    def decode_token(self, token: str) -> Optional[dict]:
        """Decode and verify JWT token. Returns None for bad signature or expiry."""
        try:
            return jwt.decode(token, self._secret_key, algorithms=[self.algorithm])
        except JWTError:
            return None


def get_token_manager(settings: Settings = Depends(get_settings)) -> TokenManager:
    return TokenManager.from_settings(settings)


def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    tokens: TokenManager = Depends(get_token_manager),
    db: Database = Depends(get_mongo_db),
) -> CurrentUser:
    """
    FastAPI dependency - Get current authenticated user.

    Usage:
        @router.get("/protected")
        def route(user: CurrentUser = Depends(get_current_user)):
            return user
    """
    if credentials is None or not credentials.credentials:
        raise UnauthorizedError("Missing bearer token")

    payload = tokens.decode_token(credentials.credentials)
    if not payload:
        raise UnauthorizedError()

    user_id = payload.get("sub")
    if not user_id or not ObjectId.is_valid(user_id):
        raise UnauthorizedError()

    # Verify user still exists and was not soft deleted
    with db_operation():
        user = UserCollection(db).find_by_id(ObjectId(user_id))

    if not user:
        raise UnauthorizedError("User no longer exists")

    try:
        role = UserRole(user.get("role"))
    except ValueError:
        raise UnauthorizedError("Unknown role")

    return CurrentUser(user_id=user_id, username=user["username"], role=role)


def require_admin(user: CurrentUser = Depends(get_current_user)) -> CurrentUser:
    """Dependency - Require admin role."""
    if not user.is_admin:
        raise ForbiddenError("Admins only")
    return user
