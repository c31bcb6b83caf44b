"""
Environment configuration for the hostel management backend.

All settings are read once from the process environment (and a local .env
file, if present) and exposed as module constants.
"""
import logging
import os

from dotenv import load_dotenv

load_dotenv()

logger = logging.getLogger(__name__)


def _bool(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes", "on")


def _list(value: str):
    return [item.strip() for item in value.split(",") if item.strip()]


# Auth
JWT_SECRET = os.getenv("JWT_SECRET")
JWT_ALGORITHM = os.getenv("JWT_ALGORITHM", "HS256")
JWT_EXPIRES_DAYS = int(os.getenv("JWT_EXPIRES_DAYS", "7"))
RESET_TOKEN_TTL_MINUTES = int(os.getenv("RESET_TOKEN_TTL_MINUTES", "30"))
RESET_URL_IN_RESPONSE = _bool("RESET_URL_IN_RESPONSE")

# Database
DATABASE_URL = os.getenv("DATABASE_URL")
DB_SERVER = os.getenv("DB_SERVER")
DB_PORT = os.getenv("DB_PORT", "1433")
DB_USER = os.getenv("DB_USER")
DB_PASS = os.getenv("DB_PASS")
DB_NAME = os.getenv("DB_NAME")
SQL_ECHO = _bool("SQL_ECHO")
AUTO_CREATE_TABLES = _bool("AUTO_CREATE_TABLES")

# HTTP
FRONTEND_URL = os.getenv("FRONTEND_URL", "")
CORS_ORIGINS = _list(os.getenv("CORS_ORIGINS", "") or FRONTEND_URL) or [
    "http://localhost:8080",
    "http://localhost:5173",
]
PORT = int(os.getenv("PORT", "5000"))

# Rate limiting (slowapi / limits notation)
RATE_LIMIT_ENABLED = _bool("RATE_LIMIT_ENABLED", "true")
RATE_LIMIT_STORAGE_URI = os.getenv("RATE_LIMIT_STORAGE_URI", "memory://")
API_RATE_LIMIT = os.getenv("API_RATE_LIMIT", "300/15 minutes")
AUTH_RATE_LIMIT = os.getenv("AUTH_RATE_LIMIT", "20/15 minutes")
SMS_RATE_LIMIT = os.getenv("SMS_RATE_LIMIT", "10/hour")

# Uploads
UPLOAD_DIR = os.getenv("UPLOAD_DIR", os.path.join(os.path.dirname(os.path.abspath(__file__)), "uploads"))
AZURE_STORAGE_ACCOUNT = os.getenv("AZURE_STORAGE_ACCOUNT")
AZURE_STORAGE_KEY = os.getenv("AZURE_STORAGE_KEY")
AZURE_STORAGE_CONTAINER = os.getenv("AZURE_STORAGE_CONTAINER", "uploads")

# SMS (Twilio)
TWILIO_ACCOUNT_SID = os.getenv("TWILIO_ACCOUNT_SID")
TWILIO_AUTH_TOKEN = os.getenv("TWILIO_AUTH_TOKEN")
TWILIO_PHONE_NUMBER = os.getenv("TWILIO_PHONE_NUMBER")
SMS_DEFAULT_COUNTRY_CODE = os.getenv("SMS_DEFAULT_COUNTRY_CODE", "+91")

# Email (Brevo)
BREVO_API_KEY = os.getenv("BREVO_API_KEY")
MAIL_SENDER_EMAIL = os.getenv("MAIL_SENDER_EMAIL", "noreply@rootnspace.in")
MAIL_SENDER_NAME = os.getenv("MAIL_SENDER_NAME", "RootnSpace")

# Startup seeding
SEED_DEFAULTS = _bool("SEED_DEFAULTS", "true")
SUPERADMIN_EMAIL = os.getenv("SUPERADMIN_EMAIL", "superadmin@thenam.com")
SUPERADMIN_PASSWORD = os.getenv("SUPERADMIN_PASSWORD", "SuperAdmin@123")
SUPERADMIN_PHONE = os.getenv("SUPERADMIN_PHONE", "9999999999")
DEFAULT_HOSTEL_NAME = os.getenv("DEFAULT_HOSTEL_NAME", "Thenam Hostel")
DEFAULT_HOSTEL_ADDRESS = os.getenv("DEFAULT_HOSTEL_ADDRESS", "Chennai, Tamil Nadu, India")

# Logging
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
LOG_FORMAT = os.getenv("LOG_FORMAT", "text")

REQUIRED_ENV_VARS = ["JWT_SECRET"]
OPTIONAL_ENV_VARS = [
    "TWILIO_ACCOUNT_SID",
    "TWILIO_AUTH_TOKEN",
    "TWILIO_PHONE_NUMBER",
    "BREVO_API_KEY",
]


def check_environment() -> bool:
    """
    Log missing configuration.

    Returns:
        bool: False if a required variable is missing
    """
    ok = True
    for name in REQUIRED_ENV_VARS:
        if not os.getenv(name):
            logger.error("Missing required env var: %s", name)
            ok = False
    for name in OPTIONAL_ENV_VARS:
        if not os.getenv(name):
            logger.warning("Missing optional env var: %s, related features may not work", name)
    return ok
