"""
Database module - MongoDB connection.
"""
from alumni_api.db.mongodb import get_mongo_db, test_mongo_connection, db_operation

__all__ = [
    "get_mongo_db",
    "test_mongo_connection",
    "db_operation"
]
