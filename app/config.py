import os
from functools import lru_cache
from pathlib import Path

from pydantic import field_validator, model_validator
from pydantic_settings import BaseSettings

from einstein_puzzle import PuzzleConfig


class Settings(BaseSettings):
    """Application settings configuration."""

    # API settings
    API_V1_STR: str = "/api/v1"
    PROJECT_NAME: str = "Einstein Puzzle API"
    LOG_LEVEL: str = "INFO"

    # File upload settings
    UPLOAD_DIR: Path = Path("uploads")
    MAX_UPLOAD_SIZE: int = 10 * 1024 * 1024  # 10MB

    # CORS settings
    BACKEND_CORS_ORIGINS: list[str] = ["*"]

    # Board settings
    IMAGE_URL: str = "./oom-arie-circle.png"
    CANVAS_SIZE: float = 600.0
    GRID_ROWS: int = 4
    GRID_COLS: int = 4
    HAT_COMPLEXITY: int = 6
    SNAP_THRESHOLD: float = 30.0

    # Difficulty settings
    DEFAULT_MISSING_PIECES: int = 5
    MAX_MISSING_PIECES: int = 20

    # Solve animation (seconds)
    SOLVE_DURATION: float = 1.5
    SETTLE_DELAY: float = 0.5

    @field_validator(
        "CANVAS_SIZE",
        "GRID_ROWS",
        "GRID_COLS",
        "HAT_COMPLEXITY",
        "SNAP_THRESHOLD",
        "DEFAULT_MISSING_PIECES",
        "MAX_MISSING_PIECES",
        "SOLVE_DURATION",
    )
    @classmethod
    def validate_positive(cls, value: float) -> float:
        """Reject board parameters that are zero or negative."""
        if value <= 0:
            raise ValueError("must be positive")
        return value

    @field_validator("SETTLE_DELAY")
    @classmethod
    def validate_settle_delay(cls, value: float) -> float:
        """Reject a negative settle delay."""
        if value < 0:
            raise ValueError("must not be negative")
        return value

    @model_validator(mode="after")
    def validate_missing_pieces(self) -> "Settings":
        """Keep the default difficulty within the cap the API enforces."""
        if self.DEFAULT_MISSING_PIECES > self.MAX_MISSING_PIECES:
            raise ValueError("DEFAULT_MISSING_PIECES must not exceed MAX_MISSING_PIECES")
        return self

    def puzzle_config(self, image_url: str = "") -> PuzzleConfig:
        """Board parameters for a new session."""
        return PuzzleConfig(
            image_url=image_url or self.IMAGE_URL,
            canvas_size=self.CANVAS_SIZE,
            grid_rows=self.GRID_ROWS,
            grid_cols=self.GRID_COLS,
            snap_threshold=self.SNAP_THRESHOLD,
            hat_complexity=self.HAT_COMPLEXITY,
        )

    class Config:
        """Pydantic configuration class."""

        case_sensitive = True
        env_file = ".env"


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


# Create instance
settings = get_settings()

# Ensure upload directory exists
os.makedirs(settings.UPLOAD_DIR, exist_ok=True)
