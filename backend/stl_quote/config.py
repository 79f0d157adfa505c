# config.py

import logging
from typing import Optional

from pydantic import Field, ValidationError as PydanticValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .core.common_types import ParseMode
from .core.exceptions import ConfigurationError

logger = logging.getLogger(__name__)

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
VALID_LOG_LEVELS = ['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']

class Settings(BaseSettings):
    """
    Application configuration settings loaded from environment variables and .env file.

    Physical constants (PLA density, print speed, layer height) and the rate
    table are business rules and live in code, not here.
    """
    model_config = SettingsConfigDict(
        env_file='.env',
        env_file_encoding='utf-8',
        extra='ignore' # Ignore extra fields from environment/dotenv
    )

    # Logging Configuration
    log_level: str = Field("INFO", description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)")

    # Upload handling
    max_upload_size_mb: float = Field(100.0, description="Largest STL payload accepted for analysis, in MB.")

    # ASCII STL parsing
    stl_parse_mode: ParseMode = Field(ParseMode.LENIENT, description="'lenient' drops malformed facet blocks, 'strict' rejects the file.")

    @property
    def max_upload_bytes(self) -> int:
        return int(self.max_upload_size_mb * 1024 * 1024)

    # Validators
    @field_validator('log_level')
    @classmethod
    def log_level_must_be_valid(cls, v: str) -> str:
        if v.upper() not in VALID_LOG_LEVELS:
            raise ValueError(f'log_level must be one of {VALID_LOG_LEVELS}')
        return v.upper()

    @field_validator('max_upload_size_mb')
    @classmethod
    def upload_limit_must_be_positive(cls, v: float) -> float:
        if v <= 0:
            raise ValueError('max_upload_size_mb must be greater than 0')
        return v

    @field_validator('stl_parse_mode', mode='before')
    @classmethod
    def parse_mode_is_case_insensitive(cls, v):
        return v.lower() if isinstance(v, str) else v

def load_settings(**overrides) -> Settings:
    """
    Builds a Settings instance, turning validation failures into ConfigurationError.

    Keyword overrides take precedence over the environment.
    """
    try:
        return Settings(**overrides)
    except PydanticValidationError as e:
        raise ConfigurationError(f"Invalid configuration: {e}") from e

def setup_logging(level: Optional[str] = None) -> None:
    """Configures the root logger with the application format."""
    logging.basicConfig(level=(level or settings.log_level), format=LOG_FORMAT)

# --- Singleton Instance ---
# Create a single instance of the settings to be imported across the application
try:
    settings = load_settings()
except ConfigurationError as e:
    logger.error(f"CRITICAL: Failed to load application configuration: {e}")
    settings = Settings.model_construct() # Defaults only, environment ignored
    logger.warning("Continuing with default settings due to configuration load failure.")
