import os
from functools import lru_cache
from typing import Optional

from dotenv import load_dotenv
from pydantic_settings import BaseSettings

load_dotenv()


class Settings(BaseSettings):
    # Server settings
    HOST: str = os.getenv("HOST", "0.0.0.0")
    PORT: int = int(os.getenv("PORT", 8000))
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")
    CORS_ORIGINS: str = os.getenv("CORS_ORIGINS", "*")

    # Imagga credentials (required for the SAR endpoint)
    IMAGGA_API_KEY: Optional[str] = os.getenv("IMAGGA_API_KEY", None)
    IMAGGA_API_SECRET: Optional[str] = os.getenv("IMAGGA_API_SECRET", None)
    IMAGGA_BASE_URL: str = os.getenv("IMAGGA_BASE_URL", "https://api.imagga.com/v2")
    IMAGGA_TIMEOUT: float = float(os.getenv("IMAGGA_TIMEOUT", "20"))

    # OpenRouter (OpenAI-compatible) settings
    OPEN_ROUTER_API: Optional[str] = os.getenv("OPEN_ROUTER_API", None)
    LLM_BASE_URL: str = os.getenv("LLM_BASE_URL", "https://openrouter.ai/api/v1")
    LLM_MODEL_NAME: str = os.getenv("LLM_MODEL_NAME", "openai/gpt-4o-mini")
    LLM_TIMEOUT: float = float(os.getenv("LLM_TIMEOUT", "30"))

    # ASF catalog search
    ASF_SEARCH_URL: str = os.getenv(
        "ASF_SEARCH_URL",
        "https://api.daac.asf.alaska.edu/services/search/param",
    )
    ASF_DATASET: str = os.getenv("ASF_DATASET", "SENTINEL-1")
    ASF_MAX_RESULTS: int = int(os.getenv("ASF_MAX_RESULTS", "250"))
    ASF_TIMEOUT: float = float(os.getenv("ASF_TIMEOUT", "30"))

    @property
    def imagga_configured(self) -> bool:
        return bool(self.IMAGGA_API_KEY) and bool(self.IMAGGA_API_SECRET)

    class Config:
        env_file = ".env"
        extra = "allow"


@lru_cache()
def get_settings() -> Settings:
    """Return the process-wide settings, read once from the environment."""
    return Settings()


settings = get_settings()
