"""MongoDB implementation of UserRepository."""

import uuid
from datetime import datetime, timezone
from logging import getLogger

from pymongo import ASCENDING
from pymongo.database import Database
from pymongo.errors import PyMongoError

from adapter.mongodb.connection import USERS_COLLECTION_NAME
from domain.model.errors import RepositoryError
from domain.model.user import Role, User, UserData, Users

logger = getLogger(__name__)

# Insertion order, with _id breaking ties between equal timestamps
NATURAL_ORDER = [('created_at', ASCENDING), ('_id', ASCENDING)]


class MongoUserRepository:
    def __init__(self, db: Database):
        self.collection = db[USERS_COLLECTION_NAME]

    # ── indexes ──────────────────────────────────────────────

    def ensure_indexes(self) -> bool:
        """Create indexes for users collection.

        The email index is deliberately not unique: uniqueness is only
        checked by registration, and administrative inserts are stored as given.
        """
        from adapter.mongodb.indexes import create_index_safe

        try:
            create_index_safe(self.collection, [('email', 1)], 'idx_users_email')
            create_index_safe(self.collection, [('created_at', 1), ('_id', 1)], 'idx_users_created_at')
            return True
        except Exception as e:
            logger.error("Failed to create users indexes", extra={"error": str(e)})
            return False

    # ── helpers ──────────────────────────────────────────────

    def _to_domain(self, doc: dict) -> User:
        """Convert MongoDB document to User domain model."""
        return User(
            id=doc['_id'],
            first_name=doc.get('first_name', ''),
            last_name=doc.get('last_name', ''),
            email=doc['email'],
            password_hash=doc.get('password_hash'),
            role=Role(doc.get('role', Role.USER.value)),
            created_at=doc.get('created_at'),
            updated_at=doc.get('updated_at'),
        )

    @staticmethod
    def _fields(data: UserData) -> dict:
        return {
            'first_name': data.first_name,
            'last_name': data.last_name,
            'email': data.email,
            'password_hash': data.password_hash,
            'role': data.role.value,
        }

    # ── write operations ─────────────────────────────────────

    def create(self, data: UserData) -> User:
        """Insert a new user and return it with its assigned id."""
        user_id = uuid.uuid4().hex
        now = datetime.now(timezone.utc)
        user_doc = {
            '_id': user_id,
            **self._fields(data),
            'created_at': now,
            'updated_at': now,
        }
        try:
            self.collection.insert_one(user_doc)
        except PyMongoError as e:
            logger.error("Failed to create user", extra={"email": data.email, "error": str(e)})
            raise RepositoryError("Failed to create user") from e

        logger.info("User created", extra={"userId": user_id, "email": data.email})
        return self._to_domain(user_doc)

    def replace(self, user_id: str, data: UserData) -> bool:
        """Overwrite every writable field, keeping _id and created_at."""
        try:
            result = self.collection.update_one(
                {'_id': user_id},
                {'$set': {**self._fields(data), 'updated_at': datetime.now(timezone.utc)}},
            )
        except PyMongoError as e:
            logger.error("Failed to replace user", extra={"userId": user_id, "error": str(e)})
            raise RepositoryError("Failed to replace user") from e

        if result.matched_count == 0:
            logger.warning("User not found for replace", extra={"userId": user_id})
            return False

        logger.info("User replaced", extra={"userId": user_id})
        return True

    def delete(self, user_id: str) -> bool:
        """Remove user document."""
        try:
            result = self.collection.delete_one({'_id': user_id})
        except PyMongoError as e:
            logger.error("Failed to delete user", extra={"userId": user_id, "error": str(e)})
            raise RepositoryError("Failed to delete user") from e

        if result.deleted_count == 0:
            logger.warning("User not found for deletion", extra={"userId": user_id})
            return False

        logger.info("User deleted", extra={"userId": user_id})
        return True

    # ── read operations ──────────────────────────────────────

    def get_by_email(self, email: str) -> User | None:
        """Find a user by email. Return User or None if not found."""
        try:
            doc = self.collection.find_one({'email': email})
        except PyMongoError as e:
            logger.error("Failed to get user by email", extra={"email": email, "error": str(e)})
            raise RepositoryError("Failed to look up user") from e
        return self._to_domain(doc) if doc else None

    def get_by_id(self, user_id: str) -> User | None:
        """Find a user by ID. Return User or None if not found."""
        try:
            doc = self.collection.find_one({'_id': user_id})
        except PyMongoError as e:
            logger.error("Failed to get user by ID", extra={"userId": user_id, "error": str(e)})
            raise RepositoryError("Failed to look up user") from e
        return self._to_domain(doc) if doc else None

    def find_all(self) -> list[User]:
        try:
            docs = self.collection.find({}).sort(NATURAL_ORDER)
            return [self._to_domain(doc) for doc in docs]
        except PyMongoError as e:
            logger.error("Failed to list users", extra={"error": str(e)})
            raise RepositoryError("Failed to list users") from e

    def find_many(self, skip: int = 0, limit: int = 10) -> Users:
        """List users with a stable sort and skip/limit pagination."""
        try:
            total_count = self.collection.count_documents({})
            docs = (
                self.collection.find({})
                .sort(NATURAL_ORDER)
                .skip(skip)
                .limit(limit)
            )
            users = [self._to_domain(doc) for doc in docs]
        except PyMongoError as e:
            logger.error("Failed to list users", extra={"skip": skip, "limit": limit, "error": str(e)})
            raise RepositoryError("Failed to list users") from e

        logger.debug("Listed users", extra={"count": len(users), "total": total_count})
        return Users(items=users, total=total_count)
