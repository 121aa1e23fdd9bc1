import os
from functools import lru_cache


class Settings:
    DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./memos_prod.sqlite")
    SECRET_KEY = os.getenv("SECRET_KEY", "SUPER_SECRET_KEY_CHANGE_IN_PRODUCTION")
    ALGORITHM = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES = int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", "30"))
    REDIS_URL = os.getenv("REDIS_URL", "redis://localhost:6379")

    APP_NAME = "Memo Resources API"
    APP_VERSION = "2.0.0"
    API_PREFIX = "/api/v2"
    DEBUG = False

    CORS_ORIGINS = os.getenv("CORS_ORIGINS", "*").split(",")

    SEED_DEMO_DATA = os.getenv("SEED_DEMO_DATA", "false").lower() in {"1", "true", "yes"}


class DevSettings(Settings):
    DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./memos_dev.sqlite")
    DEBUG = True
    SEED_DEMO_DATA = os.getenv("SEED_DEMO_DATA", "true").lower() in {"1", "true", "yes"}


class TestSettings(Settings):
    DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./memos_test.sqlite")
    DEBUG = True


@lru_cache
def get_settings():
    env = os.getenv("ENV", "dev")
    if env == "test":
        return TestSettings()
    if env == "dev":
        return DevSettings()
    return Settings()
