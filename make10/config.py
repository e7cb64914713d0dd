# make10/config.py
import os


def _env_flag(name: str, default: str = "0") -> bool:
    return os.environ.get(name, default).strip().lower() in ("1", "true", "yes", "on")


class Config:
    SECRET_KEY = os.environ.get("SECRET_KEY") or "dev-secret-key-change-in-production"

    # Puzzle
    TARGET = int(os.environ.get("MAKE10_TARGET", "10"))
    TARGETS_ENABLED = [10, 24, 36]
    MIN_DIGITS = 2
    MAX_DIGITS = 6

    # Solver
    SOLVER_STRATEGY = os.environ.get("MAKE10_SOLVER_STRATEGY", "indexed")
    SOLVER_WORKERS = int(os.environ.get("MAKE10_SOLVER_WORKERS", "1"))
    SOLVER_INTEGERS_ONLY = _env_flag("MAKE10_INTEGERS_ONLY")
    SOLVER_NON_NEGATIVE = _env_flag("MAKE10_NON_NEGATIVE")
    SOLVER_PRUNE_IDENTITIES = _env_flag("MAKE10_PRUNE_IDENTITIES")

    # Rate limiting (Flask-Limiter, in-memory)
    RATELIMIT_DEFAULT = "200 per hour; 50 per minute"
    RATELIMIT_SOLVE = "30 per minute"
    RATELIMIT_STORAGE_URI = "memory://"
    RATELIMIT_ENABLED = True

    LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")

    JSON_SORT_KEYS = False


class DevelopmentConfig(Config):
    DEBUG = True
    LOG_LEVEL = "DEBUG"


class ProductionConfig(Config):
    SESSION_COOKIE_SECURE = True


class TestingConfig(Config):
    TESTING = True
    RATELIMIT_ENABLED = False
    TARGET = 10
    SOLVER_INTEGERS_ONLY = False
    SOLVER_NON_NEGATIVE = False
    SOLVER_PRUNE_IDENTITIES = False
    SOLVER_STRATEGY = "indexed"
    SOLVER_WORKERS = 1


config_by_name = {
    "development": DevelopmentConfig,
    "production": ProductionConfig,
    "testing": TestingConfig,
    "default": Config,
}
