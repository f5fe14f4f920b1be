"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

# Collections
EMPLOYEES = "employees"
USERS = "users"
ATTENDANCE = "attendance"
LEAVES = "leaves"
PAYROLL = "payroll"
PAYROLL_SETTINGS = "payrollSettings"
PAYROLL_SETTINGS_DOC = "percentages"
ASSETS = "assets"
REQUESTS = "requests"
TRAININGS = "trainings"
TRAINING_ENROLLMENTS = "trainingEnrollments"
INSTRUCTORS = "instructors"
EXPENSES = "expenses"
HOLIDAYS = "holidays"
EXIT_PROCESSES = "exitProcesses"
USER_TRACKING = "userTracking"
USER_TRACKING_CONSENT = "userTrackingConsent"
LOCATION_HISTORY = "locationHistory"
REPORTS = "reports"

COLLECTIONS = frozenset(
    {
        EMPLOYEES,
        USERS,
        ATTENDANCE,
        LEAVES,
        PAYROLL,
        PAYROLL_SETTINGS,
        ASSETS,
        REQUESTS,
        TRAININGS,
        TRAINING_ENROLLMENTS,
        INSTRUCTORS,
        EXPENSES,
        HOLIDAYS,
        EXIT_PROCESSES,
        USER_TRACKING,
        USER_TRACKING_CONSENT,
        LOCATION_HISTORY,
        REPORTS,
    }
)

# Store-managed fields
FIELD_ID = "id"
FIELD_CREATED_AT = "createdAt"
FIELD_UPDATED_AT = "updatedAt"
FIELD_VERSION = "version"
RESERVED_FIELDS = frozenset({FIELD_ID, FIELD_CREATED_AT, FIELD_UPDATED_AT, FIELD_VERSION})

# Firestore refuses batches larger than this.
MAX_BATCH_OPERATIONS = 500

# Payroll
STANDARD_WORK_HOURS = 8
WEEKDAYS = frozenset({0, 1, 2, 3, 4})

DEFAULT_PAGE_SIZE = 25
MAX_PAGE_SIZE = 200

# Error messages returned to callers
MSG_STORE_UNAVAILABLE = "Document store not available"
MSG_NOT_FOUND = "Document not found"
MSG_EMPLOYEE_NOT_FOUND = "Employee not found"
MSG_OPERATION_FAILED = "Operation failed"
