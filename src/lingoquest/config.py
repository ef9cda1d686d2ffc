import os


class Settings:
    PROJECT_NAME: str = "lingoquest"
    DEBUG: bool = os.environ.get("DEBUG", "").lower() in ("1", "true", "yes")
    LOG_DIR: str = os.environ.get("LOG_DIR", "log")
    LOG_FILE: str = "lingoquest.log"
    DB_DIR: str = os.environ.get("DB_DIR", "db")
    DB_FILE: str = "lingoquest.db"
    EVENT_LOG_ENABLED: bool = os.environ.get("EVENT_LOG_ENABLED", "").lower() in (
        "1",
        "true",
        "yes",
    )
    VOCAB_SOURCE: str = os.environ.get("VOCAB_SOURCE", "vocabulary/vocabulary.json")
    RANDOM_SEED: str = os.environ.get("RANDOM_SEED", "")
    DEFAULT_DIFFICULTY: str = "easy"
    DEFAULT_LANGUAGE: str = "en"
    SESSION_COOKIE_NAME: str = "lingoquest_session_id"
    SESSION_TIMEOUT_MINUTES: int = 120
    ROOT_PATH: str = os.environ.get("ROOT_PATH", "")


settings = Settings()
