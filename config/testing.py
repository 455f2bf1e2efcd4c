import os

SECRET_KEY = "test-secret"

DB_CONFIG = {
    "uri": os.getenv("MONGO_URI", "mongodb://localhost:27017"),
    "database": os.getenv("MONGO_DB_NAME", "construction-management-test"),
    "timeout_ms": int(os.getenv("MONGO_TIMEOUT_MS", "2000")),
}

# Cheap hashes keep the test suite fast
BCRYPT_ROUNDS = 4

DEBUG = False
TESTING = True
LOG_LEVEL = "WARNING"

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))
AUTO_SEED_DB = bool(int(os.getenv("AUTO_SEED_DB", "0")))
