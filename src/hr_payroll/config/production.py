import os

SECRET_KEY = os.getenv("SECRET_KEY", "please-set-SECRET_KEY")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "hr_payroll"),
}

DEBUG = False
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

PAYROLL_TAX_RATE_PERCENT = os.getenv("PAYROLL_TAX_RATE_PERCENT", "10")
PAYROLL_INSURANCE_RATE_PERCENT = os.getenv("PAYROLL_INSURANCE_RATE_PERCENT", "5")
PAYROLL_BONUS_PER_DAY = os.getenv("PAYROLL_BONUS_PER_DAY", "50")
