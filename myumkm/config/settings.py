"""Application configuration settings"""

import os
from dotenv import load_dotenv

load_dotenv()


def _env_flag(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).lower() in {"1", "true", "yes", "on"}


class Config:
    # Runtime environment: "development", "testing" or "production"
    APP_ENV = os.getenv("APP_ENV", "development")
    TESTING = _env_flag("TESTING")
    DEBUG = _env_flag("DEBUG")

    # Logging
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
    LOG_PATH = os.getenv("LOG_PATH") or None
    LOG_FORMAT = os.getenv(
        "LOG_FORMAT",
        "%(asctime)s %(levelname)s [%(correlation_id)s] %(name)s: %(message)s",
    )

    # Credentials (JWT, HS256)
    JWT_SECRET = os.getenv("JWT_SECRET", "")
    JWT_ISSUER = os.getenv("JWT_ISSUER", "my-umkm")
    JWT_AUDIENCE = os.getenv("JWT_AUDIENCE", "user")
    TOKEN_TTL_DAYS = int(os.getenv("TOKEN_TTL_DAYS", "30"))

    # Passwords
    PASSWORD_PBKDF2_ITERATIONS = int(os.getenv("PASSWORD_PBKDF2_ITERATIONS", "200000"))

    # Session cookie
    AUTH_COOKIE_NAME = os.getenv("AUTH_COOKIE_NAME", "token")

    # Routing
    API_PREFIX = os.getenv("API_PREFIX", "/api")
    LOGIN_PATH = os.getenv("LOGIN_PATH", "/auth/login")
    CORS_ORIGINS = os.getenv("CORS_ORIGINS", "*").split(",")

    # Paths reachable without a credential. A prefix matches itself and any
    # sub-path; "/" matches only the root.
    PUBLIC_PATHS = (
        "/",
        "/auth/login",
        "/auth/register",
        "/auth/forgot-password",
        "/auth/reset-password",
        "/marketplace",
        "/forum",
        "/tentang",
        "/kebijakan-privasi",
        "/syarat-ketentuan",
        "/.well-known/appspecific/com.chrome.devtools.json",
        "/api/auth",
        "/health",
        "/docs",
        "/openapi.json",
    )

    # Storage: "memory" (process-local) or "prisma" (PostgreSQL via Prisma)
    STORAGE_BACKEND = os.getenv("STORAGE_BACKEND", "memory")
    DATABASE_URL: str = os.getenv("DATABASE_URL", "")
    CONVERSATION_USER_LIMIT: int = int(os.getenv("CONVERSATION_USER_LIMIT", "50"))
    USER_LIST_LIMIT: int = int(os.getenv("USER_LIST_LIMIT", "100"))

    # Server
    HOST = os.getenv("HOST", "0.0.0.0")
    PORT = int(os.getenv("PORT", "5001"))

    @classmethod
    def is_production(cls) -> bool:
        return cls.APP_ENV == "production"


class DevelopmentConfig(Config):
    """Development configuration"""

    DEBUG = True


class TestingConfig(Config):
    """Testing configuration"""

    TESTING = True
    APP_ENV = "testing"
    STORAGE_BACKEND = "memory"
    # Keep hashing fast in tests
    PASSWORD_PBKDF2_ITERATIONS = 1000


class ProductionConfig(Config):
    """Production configuration"""

    APP_ENV = "production"
    DEBUG = False


# Configuration dictionary
config = {
    "development": DevelopmentConfig,
    "testing": TestingConfig,
    "production": ProductionConfig,
    "default": DevelopmentConfig,
}


def get_config(env=None):
    """Get configuration based on environment"""
    if env is None:
        env = os.getenv("APP_ENV", "development")
    return config.get(env, config["default"])
