"""
Auth Service - registration and login against the users collection.

Login accepts either the username or the email address.
"""

import logging
from typing import Optional

from pymongo.database import Database
from pymongo.errors import DuplicateKeyError

from alumni_api.core.auth import TokenManager, hash_password, verify_password
from alumni_api.core.errors import NotFoundError, UnauthorizedError, ValidationError
from alumni_api.db.mongodb import db_operation
from alumni_api.schemas.schemas import (
    CurrentUser, LoginRequest, RegisterRequest, TokenResponse, UserResponse, UserRole
)
from alumni_api.services.mongo_service import UserCollection, to_object_id, utcnow
from alumni_api.services.user_service import to_user_response

logger = logging.getLogger(__name__)


class AuthService:

    def __init__(self, tokens: TokenManager, db: Optional[Database] = None):
        self.tokens = tokens
        self.users = UserCollection(db)

    def register(self, request: RegisterRequest, role: UserRole = UserRole.user) -> UserResponse:
        doc = {
            "username": request.username,
            "email": request.email or f"{request.username}@example.com",
            "password": hash_password(request.password),
            "role": role.value,
            "deleted": False,
            "created_at": utcnow(),
        }
        with db_operation():
            if self.users.find_by_username(request.username) is not None:
                raise ValidationError("Username already registered")
            try:
                self.users.insert(doc)
            except DuplicateKeyError:
                # lost a race against a concurrent registration
                raise ValidationError("Username already registered")
        logger.info("Registered %s account '%s'", role.value, request.username)
        return to_user_response(doc)

    def login(self, request: LoginRequest) -> TokenResponse:
        with db_operation():
            user = self.users.find_by_username(request.username)
            if user is None:
                user = self.users.find_by_email(request.username)

        if user is None or not verify_password(request.password, user.get("password", "")):
            logger.info("Failed login for '%s'", request.username)
            raise UnauthorizedError("Invalid username or password")
        if user.get("deleted"):
            raise UnauthorizedError("User has been deleted")

        token = self.tokens.create_access_token(str(user["_id"]), user["username"], user["role"])
        return TokenResponse(token=token, user=to_user_response(user))

    def me(self, actor: CurrentUser) -> UserResponse:
        with db_operation():
            user = self.users.find_by_id(to_object_id(actor.user_id, "user ID"))
        if user is None:
            raise NotFoundError("User not found")
        return to_user_response(user)
