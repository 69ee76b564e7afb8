import os

SECRET_KEY = "test-secret"

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "hr_payroll_test"),
}

DEBUG = False
TESTING = True
LOG_LEVEL = "WARNING"

PAYROLL_TAX_RATE_PERCENT = "10"
PAYROLL_INSURANCE_RATE_PERCENT = "5"
PAYROLL_BONUS_PER_DAY = "50"
