"""
Environment configuration and constants.
"""
import logging
from typing import Optional
from dotenv import load_dotenv
from pydantic_settings import BaseSettings

# Load environment variables from .env file at module import time
try:
    load_dotenv()
except (PermissionError, OSError):
    pass


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""
    
    # Model server configuration (Ollama)
    ollama_base_url: str = "http://localhost:11434"
    default_model: str = "deepseek-r1:14b"
    llm_temperature: float = 0.7
    llm_top_p: float = 0.9
    llm_max_tokens: int = 2000
    llm_timeout_seconds: float = 120.0
    
    # Work-tracking defaults (optional; per-project credentials are stored encrypted)
    azure_devops_org_url: Optional[str] = None
    azure_devops_pat: Optional[str] = None
    azure_devops_project: Optional[str] = None
    
    # Application Configuration
    debug: bool = False
    log_level: str = "INFO"
    
    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = False
        extra = "ignore"  # Ignore extra environment variables that aren't defined in the model


def configure_logging(level: Optional[str] = None) -> None:
    """
    Configure root logging for processes that embed the package.
    
    Args:
        level: Log level name; defaults to settings.log_level
    """
    level_name = (level or settings.log_level or "INFO").upper()
    logging.basicConfig(level=getattr(logging, level_name, logging.INFO))


# Global settings instance
settings = Settings()
