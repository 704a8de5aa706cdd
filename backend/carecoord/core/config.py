from pydantic_settings import BaseSettings, SettingsConfigDict
import os
import logging
from dotenv import load_dotenv

# Absolute repo root (backend/carecoord/core -> repo root)
PROJECT_ROOT = os.path.dirname(os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__)))))

# override=False: real environment variables win, the root .env only supplies defaults
ROOT_ENV_FILE = os.path.join(PROJECT_ROOT, ".env")
load_dotenv(ROOT_ENV_FILE, override=False)

logger = logging.getLogger(__name__)


class Settings(BaseSettings):
    """
    Global settings for the care coordination medication service.
    Values come from the root .env file or the process environment.
    """
    PROJECT_NAME: str = "Care Coordination Medication Service"
    VERSION: str = "1.0.0"
    API_PREFIX: str = "/api"
    DEBUG: bool = os.getenv("DEBUG", "false").lower() == "true"

    # Expose PROJECT_ROOT
    PROJECT_ROOT: str = PROJECT_ROOT

    # LOGGING
    LOG_DIR_OVERRIDE: str = os.getenv("LOG_DIR", "")
    LOG_TO_FILE: bool = os.getenv("LOG_TO_FILE", "true").lower() == "true"

    @property
    def LOG_DIR(self) -> str:
        dir_path = self.LOG_DIR_OVERRIDE or os.path.join(self.PROJECT_ROOT, "logs")
        os.makedirs(dir_path, exist_ok=True)
        return dir_path

    # RXNAV (NLM drug terminology + interaction services)
    RXNAV_BASE_URL: str = os.getenv("RXNAV_BASE_URL", "https://rxnav.nlm.nih.gov/REST")
    # Same value httpx uses when no timeout is given
    RXNAV_TIMEOUT_SECONDS: float = float(os.getenv("RXNAV_TIMEOUT_SECONDS", "5.0"))
    RXNAV_APPROX_MAX_ENTRIES: int = int(os.getenv("RXNAV_APPROX_MAX_ENTRIES", "10"))
    # Interaction groups from this source are preferred over the first group returned
    INTERACTION_PREFERRED_SOURCE: str = os.getenv("INTERACTION_PREFERRED_SOURCE", "DrugBank")

    model_config = SettingsConfigDict(case_sensitive=True, env_file=ROOT_ENV_FILE, extra="ignore")

    def __init__(self, **kwargs):
        super().__init__(**kwargs)
        self.RXNAV_BASE_URL = self.RXNAV_BASE_URL.rstrip("/")
        if self.RXNAV_TIMEOUT_SECONDS <= 0:
            logger.warning("RXNAV_TIMEOUT_SECONDS=%s is not positive, falling back to 5.0", self.RXNAV_TIMEOUT_SECONDS)
            self.RXNAV_TIMEOUT_SECONDS = 5.0
        logger.debug("RxNav base url: %s (timeout=%.1fs)", self.RXNAV_BASE_URL, self.RXNAV_TIMEOUT_SECONDS)


settings = Settings()
