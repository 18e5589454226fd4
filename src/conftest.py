import os

# Set before any test imports services.token_service, which requires a key.
os.environ.setdefault("JWT_SECRET_KEY", "test-secret-key-for-unit-tests-only")
os.environ.setdefault("BCRYPT_ROUNDS", "4")
# Keep tests away from a real database.
os.environ.pop("MONGO_URL", None)
