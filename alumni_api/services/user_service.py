"""
User Service - account administration (admin only at the routing layer).
"""

import logging
from typing import List, Optional, Tuple

from pymongo.database import Database

from alumni_api.core.errors import NotFoundError
from alumni_api.db.mongodb import db_operation
from alumni_api.schemas.schemas import MetaInfo, UserResponse
from alumni_api.services.mongo_service import UserCollection, serialize_doc, to_object_id
from alumni_api.utils.pagination import ListQuery, build_meta

logger = logging.getLogger(__name__)


def to_user_response(doc: dict) -> UserResponse:
    # password hash is dropped by the response model
    return UserResponse(**serialize_doc(doc))


class UserService:

    def __init__(self, db: Optional[Database] = None):
        self.users = UserCollection(db)

    def get_all(self, query: ListQuery) -> Tuple[List[UserResponse], MetaInfo]:
        with db_operation():
            docs = self.users.find_page(
                query.search, query.sort_by, query.direction, query.offset, query.limit
            )
            total = self.users.count(query.search)
        return [to_user_response(d) for d in docs], build_meta(query, total)

    def get_by_id(self, user_id: str) -> UserResponse:
        oid = to_object_id(user_id, "user ID")
        with db_operation():
            doc = self.users.find_by_id(oid)
        if doc is None:
            raise NotFoundError("User not found")
        return to_user_response(doc)

    def soft_delete(self, user_id: str) -> None:
        """Flag the account as deleted. Its alumni profile is not touched."""
        oid = to_object_id(user_id, "user ID")
        with db_operation():
            found = self.users.set_deleted(oid, True)
        if not found:
            raise NotFoundError("User not found")
        logger.info("User %s soft deleted", oid)
