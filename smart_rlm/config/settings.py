"""
Application-wide configuration management.

This module loads configuration from environment variables and provides
a singleton Config object that can be accessed throughout the application.
Model endpoint settings are passed through unchanged to the model client.
"""

import os
from pathlib import Path
from typing import Dict, Optional
from dotenv import load_dotenv

# Load environment variables from .env file if it exists
load_dotenv()


def _env_bool(name: str, default: str) -> bool:
    return os.getenv(name, default).strip().lower() in {"1", "true", "yes", "on"}


class Config:
    """
    Singleton configuration class for application settings.

    Only one instance exists for the process lifetime; components receive
    their settings as constructor defaults from it and can be overridden
    explicitly (tests do this).
    """

    _instance: Optional['Config'] = None
    _initialized: bool = False

    def __new__(cls):
        """Singleton pattern: return the same instance if already created."""
        if cls._instance is None:
            cls._instance = super(Config, cls).__new__(cls)
        return cls._instance

    def __init__(self):
        """Initialize configuration (only once due to Singleton pattern)."""
        if self._initialized:
            return

        # ====================================================================
        # MODEL SERVICE
        # ====================================================================
        self.BASE_URL = os.getenv("OPENROUTER_URL", "")
        self.API_KEY = os.getenv("OPENROUTER_KEY", "")
        self.SITE_URL = os.getenv("SITE_URL", "")
        self.SITE_NAME = os.getenv("SITE_NAME", "")
        self.LLM_MAX_RETRIES = int(os.getenv("LLM_MAX_RETRIES", "0"))

        # Root agent writes the strategy, leaf agents read the chunks
        self.ROOT_MODEL = os.getenv("ROOT_MODEL", "openai/gpt-5-mini")
        self.LEAF_MODEL = os.getenv("LEAF_MODEL", "openai/gpt-4o-mini")

        # ====================================================================
        # PATHS
        # ====================================================================
        project_root = Path(__file__).parent.parent.parent

        self.PROJECT_ROOT = project_root
        self.DATA_DIR = project_root / "data"
        self.RESULTS_DIR = project_root / "results"
        self.LOGS_DIR = self.RESULTS_DIR / "logs"
        self.CONTEXT_PATH = Path(os.getenv("CONTEXT_PATH", str(self.DATA_DIR / "data.txt")))

        self._ensure_directories()

        # ====================================================================
        # STRATEGY SETTINGS
        # ====================================================================
        # Recommended chunking advertised to the root agent (characters)
        self.CHUNK_SIZE = int(os.getenv("CHUNK_SIZE", "15000"))
        self.CHUNK_OVERLAP = int(os.getenv("CHUNK_OVERLAP", "500"))

        # ====================================================================
        # SANDBOX SETTINGS
        # ====================================================================
        # Wall-clock limit for one strategy program; 0 disables the limit
        self.SANDBOX_TIMEOUT = float(os.getenv("SANDBOX_TIMEOUT", "300"))
        self.ENFORCE_FALLBACK = _env_bool("ENFORCE_FALLBACK", "true")

        # ====================================================================
        # LOGGING SETTINGS
        # ====================================================================
        self.LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
        self.LOG_FILE = self.LOGS_DIR / "app.log"

        # Mark as initialized
        self._initialized = True

    def _ensure_directories(self):
        """Create necessary directories if they don't exist."""
        for directory in (self.RESULTS_DIR, self.LOGS_DIR):
            directory.mkdir(parents=True, exist_ok=True)

    @property
    def default_headers(self) -> Dict[str, str]:
        """Attribution headers forwarded to the model service."""
        headers = {}
        if self.SITE_URL:
            headers["HTTP-Referer"] = self.SITE_URL
        if self.SITE_NAME:
            headers["X-Title"] = self.SITE_NAME
        return headers

    def validate(self) -> bool:
        """
        Validate that required configuration is present.

        Returns:
            bool: True if configuration is valid, False otherwise
        """
        if not self.API_KEY:
            print("WARNING: OPENROUTER_KEY not set in environment variables")
            return False
        return True


# Global singleton instance
config = Config()
