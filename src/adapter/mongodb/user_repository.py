"""MongoDB implementation of UserRepository.

The profile is embedded in the user document, so account type and profile
are written by a single document update and are never observed apart.
"""

import uuid
from datetime import datetime, timezone
from logging import getLogger
from pymongo import ReturnDocument
from pymongo.database import Database
from pymongo.errors import DuplicateKeyError, PyMongoError
from adapter.mongodb import USERS_COLLECTION_NAME
from domain.model.errors import StorageError
from domain.model.profile import PROFILE_FIELDS, Profile
from domain.model.user import AccountType, User

logger = getLogger(__name__)


class MongoUserRepository:
    def __init__(self, db: Database):
        self.collection = db[USERS_COLLECTION_NAME]

    def ensure_indexes(self) -> bool:
        """Create indexes for users collection."""
        from adapter.mongodb.indexes import create_index_safe

        try:
            create_index_safe(self.collection, [('email', 1)], 'idx_users_email', unique=True)
            create_index_safe(self.collection, [('created_at', -1)], 'idx_users_created_at')
            return True
        except PyMongoError as e:
            logger.error("Failed to create users indexes", extra={"error": str(e)})
            return False

    def _to_domain(self, doc: dict) -> User:
        """Convert MongoDB document to User domain model."""
        return User(
            id=doc['_id'],
            name=doc['name'],
            email=doc['email'],
            created_at=doc['created_at'],
            updated_at=doc['updated_at'],
            account_type=AccountType(doc.get('account_type', AccountType.UNSET.value)),
            profile=Profile.from_dict(doc.get('profile')),
            last_login=doc.get('last_login'),
            password_hash=doc.get('password_hash'),
        )

    @staticmethod
    def _profile_merge(profile: dict) -> dict:
        """Pipeline expression merging `profile` over the stored profile (or defaults)."""
        updates = {k: {'$literal': v} for k, v in profile.items() if k in PROFILE_FIELDS and v is not None}
        return {'$mergeObjects': [Profile().to_dict(), {'$ifNull': ['$profile', {}]}, updates]}

    def create(self, email: str, password_hash: str, name: str) -> User | None:
        """Create a new user and return the User object."""
        try:
            user_id = uuid.uuid4().hex
            now = datetime.now(timezone.utc)
            user_doc = {
                '_id': user_id,
                'email': email,
                'password_hash': password_hash,
                'name': name,
                'account_type': AccountType.UNSET.value,
                'profile': None,
                'created_at': now,
                'updated_at': now,
            }
            self.collection.insert_one(user_doc)

            logger.info("User created", extra={"userId": user_id})
            return self._to_domain(user_doc)
        except DuplicateKeyError:
            logger.warning("User creation failed: email already exists")
            return None
        except PyMongoError as e:
            logger.error("Failed to create user", extra={"error": str(e)})
            return None

    def get_by_email(self, email: str) -> User | None:
        """Find a user by email. Return User or None if not found. Raises StorageError."""
        try:
            doc = self.collection.find_one({'email': email})
        except PyMongoError as e:
            logger.error("Failed to get user by email", extra={"error": str(e)})
            raise StorageError() from e
        return self._to_domain(doc) if doc else None

    def get_by_id(self, user_id: str) -> User | None:
        """Find a user by ID. Return User or None if not found. Raises StorageError."""
        try:
            doc = self.collection.find_one({'_id': user_id})
        except PyMongoError as e:
            logger.error("Failed to get user by ID", extra={"userId": user_id, "error": str(e)})
            raise StorageError() from e
        return self._to_domain(doc) if doc else None

    def update_last_login(self, user_id: str) -> bool:
        """Update the last login timestamp for a user. Return True if successful."""
        try:
            now = datetime.now(timezone.utc)
            result = self.collection.update_one(
                {'_id': user_id},
                {'$set': {'last_login': now, 'updated_at': now}}
            )
            return result.modified_count > 0
        except PyMongoError as e:
            logger.error("Failed to update last_login", extra={"userId": user_id, "error": str(e)})
            return False

    def set_account_type(
        self,
        user_id: str,
        account_type: AccountType,
        profile: dict,
        allowed_from: tuple[AccountType, ...],
    ) -> User | None:
        """Write account type and profile in one pipeline update (all-or-nothing)."""
        try:
            doc = self.collection.find_one_and_update(
                {'_id': user_id, 'account_type': {'$in': [t.value for t in allowed_from]}},
                [{'$set': {
                    'profile': self._profile_merge(profile),
                    'account_type': account_type.value,
                    'updated_at': datetime.now(timezone.utc),
                }}],
                return_document=ReturnDocument.AFTER,
            )
            if not doc:
                logger.warning("Account type not written", extra={"userId": user_id})
                return None
            return self._to_domain(doc)
        except PyMongoError as e:
            logger.error("Failed to set account type", extra={"userId": user_id, "error": str(e)})
            return None

    def upsert_profile(self, user_id: str, profile: dict, name: str | None = None) -> User | None:
        updates = {
            'profile': self._profile_merge(profile),
            'updated_at': datetime.now(timezone.utc),
        }
        if name:
            updates['name'] = {'$literal': name}
        try:
            doc = self.collection.find_one_and_update(
                {'_id': user_id},
                [{'$set': updates}],
                return_document=ReturnDocument.AFTER,
            )
            return self._to_domain(doc) if doc else None
        except PyMongoError as e:
            logger.error("Failed to upsert profile", extra={"userId": user_id, "error": str(e)})
            return None

    def update_password(self, user_id: str, password_hash: str) -> bool:
        try:
            result = self.collection.update_one(
                {'_id': user_id},
                {'$set': {'password_hash': password_hash, 'updated_at': datetime.now(timezone.utc)}},
            )
            return result.matched_count > 0
        except PyMongoError as e:
            logger.error("Failed to update password", extra={"userId": user_id, "error": str(e)})
            return False
