SECRET_KEY = "test-secret-key"

DEBUG = False
LOG_LEVEL = "WARNING"

STORE_BACKEND = "memory"

FIREBASE_PROJECT_ID = ""
FIREBASE_CREDENTIALS = None

DB_CONFIG = {
    "host": "localhost",
    "port": 3306,
    "user": "root",
    "password": "",
    "database": "hr_portal_test",
}

AUTO_INIT_DB = False
AUTO_SEED_DB = False

DEFAULT_PAGE_SIZE = 10
COMPANY_NAME = "HR Portal"
