"""
Application settings and configuration management.
"""

from enum import Enum
from typing import Annotated, List, Optional
from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict
from functools import lru_cache


class EditSwitchPolicy(str, Enum):
    """What happens to an uncommitted draft when another cell is activated."""
    DISCARD = "discard"
    COMMIT = "commit"


class OutOfBoundsPolicy(str, Enum):
    """How snapshot entries outside the grid are treated."""
    REJECT = "reject"
    CLAMP = "clamp"


class Settings(BaseSettings):
    """Application settings with environment variable support."""

    # Backing store
    STORE_BASE_URL: str = Field(default="http://localhost:5000")
    STORE_TABLE_PATH: str = Field(default="/api/table")
    STORE_CELL_PATH: str = Field(default="/api/table/cell")
    SYNC_TIMEOUT: Optional[float] = Field(default=None)  # None = wait forever

    # Grid configuration
    GRID_ROWS: int = Field(default=30)
    GRID_COLUMNS: int = Field(default=26)
    DEFAULT_COLUMN_WIDTH: int = Field(default=100)
    DEFAULT_ROW_HEIGHT: int = Field(default=30)
    MIN_COLUMN_WIDTH: int = Field(default=50)
    MIN_ROW_HEIGHT: int = Field(default=20)

    # Editing and synchronization behaviour
    EDIT_SWITCH_POLICY: EditSwitchPolicy = Field(
        default=EditSwitchPolicy.DISCARD)
    GUARD_STALE_RESPONSES: bool = Field(default=True)
    OUT_OF_BOUNDS_POLICY: OutOfBoundsPolicy = Field(
        default=OutOfBoundsPolicy.REJECT)

    # Development store server
    HOST: str = Field(default="0.0.0.0")
    PORT: int = Field(default=5000)
    DEBUG: bool = Field(default=False)
    APP_NAME: str = Field(default="Spreadsheet Grid Store")
    APP_VERSION: str = Field(default="1.0.0")
    CORS_ORIGINS: Annotated[List[str], NoDecode] = Field(
        default=[
            "http://localhost:3000",
            "http://localhost:5173",
            "http://127.0.0.1:3000",
            "http://127.0.0.1:5173"
        ]
    )

    # Logging
    LOG_LEVEL: str = Field(default="INFO")
    LOG_FORMAT: str = Field(
        default="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )
    LOG_FILE: Optional[str] = Field(default=None)
    LOG_ROTATION: bool = Field(default=True)
    LOG_MAX_SIZE: str = Field(default="10MB")
    LOG_BACKUP_COUNT: int = Field(default=5)

    @field_validator('CORS_ORIGINS', mode='before')
    @classmethod
    def parse_cors_origins(cls, v):
        """Parse CORS origins from string or list."""
        if isinstance(v, str):
            return [origin.strip() for origin in v.split(',') if origin.strip()]
        return v

    @field_validator('LOG_LEVEL')
    @classmethod
    def validate_log_level(cls, v):
        """Validate log level."""
        valid_levels = ['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']
        if v.upper() not in valid_levels:
            raise ValueError(f'Log level must be one of: {valid_levels}')
        return v.upper()

    @field_validator('GRID_ROWS', 'GRID_COLUMNS')
    @classmethod
    def validate_dimensions(cls, v):
        """Validate grid dimensions."""
        if v < 1:
            raise ValueError('Grid dimensions must be at least 1')
        return v

    @field_validator('STORE_BASE_URL')
    @classmethod
    def strip_trailing_slash(cls, v):
        return v.rstrip('/')

    @model_validator(mode='after')
    def validate_default_sizes(self):
        """Default sizes must respect the resize minimums."""
        if self.DEFAULT_COLUMN_WIDTH < self.MIN_COLUMN_WIDTH:
            raise ValueError(
                'DEFAULT_COLUMN_WIDTH must not be below MIN_COLUMN_WIDTH')
        if self.DEFAULT_ROW_HEIGHT < self.MIN_ROW_HEIGHT:
            raise ValueError(
                'DEFAULT_ROW_HEIGHT must not be below MIN_ROW_HEIGHT')
        return self

    @property
    def is_development(self) -> bool:
        """Check if running in development mode."""
        return self.DEBUG

    def get_grid_config(self) -> dict:
        """Get grid dimensions as GridDimensions keyword arguments."""
        return {
            "rows": self.GRID_ROWS,
            "columns": self.GRID_COLUMNS,
            "default_column_width": self.DEFAULT_COLUMN_WIDTH,
            "default_row_height": self.DEFAULT_ROW_HEIGHT,
            "min_column_width": self.MIN_COLUMN_WIDTH,
            "min_row_height": self.MIN_ROW_HEIGHT,
        }

    def get_sync_config(self) -> dict:
        """Get store connection options as SyncClient keyword arguments."""
        return {
            "base_url": self.STORE_BASE_URL,
            "table_path": self.STORE_TABLE_PATH,
            "cell_path": self.STORE_CELL_PATH,
            "timeout": self.SYNC_TIMEOUT,
        }

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
    )


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
