from typing import List, Optional

from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    database_url: str = Field(..., alias="DATABASE_URL")

    jwt_secret_key: str = Field(..., alias="JWT_SECRET_KEY")
    jwt_algorithm: str = Field("HS256", alias="JWT_ALGORITHM")
    access_token_expire_minutes: int = Field(60, alias="ACCESS_TOKEN_EXPIRE_MINUTES")
    student_session_expire_days: int = Field(180, alias="STUDENT_SESSION_EXPIRE_DAYS")

    # Only this email may bootstrap the first admin account
    admin_email: str = Field("admin@example.com", alias="ADMIN_EMAIL")
    admin_password: Optional[str] = Field(None, alias="ADMIN_PASSWORD")

    # Lab courses whose sessions are split across batches B1/B2
    batch_configurable_courses: List[str] = Field(
        default_factory=lambda: ["AI23331", "CD23631", "CD23632"],
        alias="BATCH_CONFIGURABLE_COURSES",
    )

    grid_start_hour: int = Field(8, alias="GRID_START_HOUR")
    grid_end_hour: int = Field(17, alias="GRID_END_HOUR")
    grid_hour_height: int = Field(60, alias="GRID_HOUR_HEIGHT")
    grid_min_block_height: int = Field(40, alias="GRID_MIN_BLOCK_HEIGHT")
    admin_grid_hour_height: int = Field(70, alias="ADMIN_GRID_HOUR_HEIGHT")
    admin_grid_min_block_height: int = Field(50, alias="ADMIN_GRID_MIN_BLOCK_HEIGHT")
    # Blocks below these heights show the course code only
    grid_compact_height: int = Field(50, alias="GRID_COMPACT_HEIGHT")
    admin_grid_compact_height: int = Field(60, alias="ADMIN_GRID_COMPACT_HEIGHT")

    log_level: str = Field("INFO", alias="LOG_LEVEL")
    cors_origins: List[str] = Field(default_factory=lambda: ["*"], alias="CORS_ORIGINS")

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"
        populate_by_name = True


settings = Settings()
