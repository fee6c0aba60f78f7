"""
Configuration management using Pydantic Settings
"""
from pydantic_settings import BaseSettings
from typing import List, Optional


class Settings(BaseSettings):
    """Application settings loaded from environment variables"""

    # Database
    DATABASE_URL: str

    # Auth
    JWT_SECRET: str
    JWT_ALGORITHM: str = "HS256"
    JWT_EXPIRES_DAYS: int = 7
    RESET_TOKEN_TTL_MINUTES: int = 60
    BCRYPT_ROUNDS: int = 12

    # LLM providers: groq, gemini, huggingface or none
    LLM_PROVIDER: str = "groq"
    LLM_TIMEOUT_SECONDS: float = 30.0
    GROQ_API_KEY: Optional[str] = None
    GROQ_MODEL: str = "llama-3.3-70b-versatile"
    GROQ_API_URL: str = "https://api.groq.com/openai/v1/chat/completions"
    GEMINI_API_KEY: Optional[str] = None
    GEMINI_MODEL: str = "gemini-1.5-flash"
    HUGGINGFACE_API_KEY: Optional[str] = None
    HUGGINGFACE_MODEL: str = "distilbert-base-uncased-finetuned-sst-2-english"
    HUGGINGFACE_API_URL: str = "https://api-inference.huggingface.co/models"

    # Redis
    REDIS_URL: str = "redis://redis:6379/0"
    CACHE_ENABLED: bool = True
    MODULE_CACHE_TTL: int = 3600  # 1 hour

    # Application
    APP_NAME: str = "PromptMaster AI"
    APP_VERSION: str = "1.0.0"
    DEBUG: bool = False
    ALLOWED_ORIGINS: List[str] = ["http://localhost:3000", "http://localhost:5173"]
    SEED_ON_STARTUP: bool = True

    # Rate Limiting
    RATE_LIMIT_ENABLED: bool = True
    RATE_LIMIT_PER_MINUTE: int = 60
    RATE_LIMIT_PER_HOUR: int = 1000
    TRUST_FORWARDED_FOR: bool = False  # only behind a proxy that sets X-Forwarded-For

    # Scoring and progress policy
    POINTS_PER_EXERCISE: int = 10
    MAX_SCORE: int = 10
    LEADERBOARD_LIMIT: int = 10
    LEADERBOARD_TIEBREAK_BY_COMPLETED: bool = True
    LOG_SUBMISSIONS: bool = False

    # Logging
    LOG_LEVEL: str = "INFO"

    class Config:
        env_file = ".env"
        case_sensitive = True


# Global settings instance
settings = Settings()
