import os
from functools import lru_cache

from dotenv import load_dotenv
from pydantic import BaseModel

# Load environment variables
load_dotenv()

MAX_UPLOAD_BYTES = 10 * 1024 * 1024  # 10MB


class Settings(BaseModel):
    """Runtime configuration read from the environment."""

    anthropic_model: str = "claude-sonnet-4-5"
    model_timeout_seconds: float = 120.0
    max_upload_bytes: int = MAX_UPLOAD_BYTES
    supabase_url: str = ""
    supabase_key: str = ""
    staging_bucket: str = "bid-staging"
    redis_url: str = "redis://localhost:6379/0"
    project_key: str = "bid-compare:project"
    python_env: str = "development"

    @property
    def is_production(self) -> bool:
        return self.python_env == "production"


@lru_cache
def get_settings() -> Settings:
    """Build settings once per process from environment variables."""
    env = {
        "anthropic_model": os.getenv("ANTHROPIC_MODEL"),
        "model_timeout_seconds": os.getenv("MODEL_TIMEOUT_SECONDS"),
        "max_upload_bytes": os.getenv("MAX_UPLOAD_BYTES"),
        "supabase_url": os.getenv("SUPABASE_URL"),
        "supabase_key": os.getenv("SUPABASE_KEY"),
        "staging_bucket": os.getenv("STAGING_BUCKET"),
        "redis_url": os.getenv("REDIS_URL"),
        "project_key": os.getenv("PROJECT_KEY"),
        "python_env": os.getenv("PYTHON_ENV"),
    }
    return Settings(**{key: value for key, value in env.items() if value is not None})
