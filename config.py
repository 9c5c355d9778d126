import os

BASE_DIR = os.path.abspath(os.path.dirname(__file__))


class Config:
    # Secrets
    SECRET_KEY = os.getenv("SECRET_KEY", "dev-only-change-me")

    # In-memory SQLite unless DATABASE_URL points somewhere persistent
    SQLALCHEMY_DATABASE_URI = os.getenv("DATABASE_URL", "sqlite://")
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    AUTO_CREATE_TABLES = os.getenv("AUTO_CREATE_TABLES", "true").lower() == "true"

    # Session cookie name for our auth token
    AUTH_COOKIE_NAME = "site_session"

    # 30 days session lifetime
    SESSION_LIFETIME_SECONDS = 30 * 24 * 60 * 60

    # Session/cookie security defaults
    SESSION_COOKIE_HTTPONLY = True
    SESSION_COOKIE_SAMESITE = "Lax"
    SESSION_COOKIE_SECURE = os.getenv("SESSION_COOKIE_SECURE", "false").lower() == "true"

    # Brute-force protection
    MAX_LOGIN_ATTEMPTS = 5
    LOCKOUT_MINUTES = 15
    LOGIN_ATTEMPT_RETENTION_HOURS = 24
    LOGIN_ATTEMPT_MAX_RECORDS = 10000

    BCRYPT_ROUNDS = int(os.getenv("BCRYPT_ROUNDS", "12"))

    # Uploads
    UPLOAD_FOLDER = os.getenv("UPLOAD_FOLDER", os.path.join(os.getcwd(), "uploads"))
    ALLOWED_UPLOAD_EXTENSIONS = {".png", ".jpg", ".jpeg", ".gif", ".webp", ".svg"}
    MAX_CONTENT_LENGTH = 10 * 1024 * 1024

    # First super admin, created when the users table is empty
    SUPER_ADMIN_USERNAME = os.getenv("SUPER_ADMIN_USERNAME", "owner")
    SUPER_ADMIN_PASSWORD = os.getenv("SUPER_ADMIN_PASSWORD")

    # Account no other super admin may modify
    PROTECTED_USERNAME = os.getenv("PROTECTED_USERNAME", SUPER_ADMIN_USERNAME)

    # Logging
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
    LOG_FILE = os.getenv("LOG_FILE")

    # Basic app settings
    DEBUG = False


class TestConfig(Config):
    TESTING = True
    SECRET_KEY = "test-secret"
    SQLALCHEMY_DATABASE_URI = "sqlite://"
    AUTO_CREATE_TABLES = True
    BCRYPT_ROUNDS = 4
    SUPER_ADMIN_USERNAME = "owner"
    SUPER_ADMIN_PASSWORD = "owner-password"
    PROTECTED_USERNAME = "owner"
    LOG_LEVEL = "WARNING"
    LOG_FILE = None
