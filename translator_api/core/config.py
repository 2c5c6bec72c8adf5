from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # Store (any SQLAlchemy URL; defaults to a local SQLite file)
    DATABASE_URL: str = "sqlite:///./translations.db"
    DB_POOL_TIMEOUT: int = 5
    DB_POOL_RECYCLE: int = 30
    DB_CONNECT_TIMEOUT: int = 5

    # DeepL
    DEEPL_API_KEY: str | None = None
    DEEPL_API_URL: str = "https://api-free.deepl.com/v2/translate"
    DEEPL_SOURCE_LANG: str = "EN"

    # OpenAI (GPT)
    OPENAI_API_KEY: str | None = None
    OPENAI_API_URL: str = "https://api.openai.com/v1/chat/completions"

    # Google (Gemini)
    GOOGLE_API_KEY: str | None = None

    # Every provider call gets this timeout
    PROVIDER_TIMEOUT_SECONDS: float = 30.0

    HISTORY_LIMIT: int = 5
    CORS_ORIGINS: list[str] = ["*"]
    LOG_LEVEL: str = "INFO"

    class Config:
        env_file = ".env"
        extra = "allow"  # .env may hold keys for other tools


# Process-wide default; pass an explicit Settings where one is accepted
settings = Settings()
