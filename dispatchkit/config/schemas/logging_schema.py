"""Logging configuration schema."""
from pydantic import BaseModel, Field, field_validator


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: str = Field("INFO", description="Root log level")
    destination: str = Field("stdout", description="Log destination (stdout, file, both)")
    file_path: str = Field("logs/dispatchkit.log", description="Log file path")
    max_size_mb: int = Field(10, description="Maximum log file size in MB before rotation")
    backup_count: int = Field(5, description="Number of rotated log files to keep")
    format: str = Field("console", description="Log renderer (console, json)")

    @field_validator("level")
    @classmethod
    def validate_level(cls, v: str) -> str:
        """Validate log level."""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if v.upper() not in valid_levels:
            raise ValueError(f"Log level must be one of {valid_levels}")
        return v.upper()

    @field_validator("destination")
    @classmethod
    def validate_destination(cls, v: str) -> str:
        """Validate log destination."""
        valid_destinations = ["stdout", "file", "both"]
        if v not in valid_destinations:
            raise ValueError(f"Log destination must be one of {valid_destinations}")
        return v

    @field_validator("format")
    @classmethod
    def validate_format(cls, v: str) -> str:
        """Validate log renderer."""
        if v not in ("console", "json"):
            raise ValueError("Log format must be 'console' or 'json'")
        return v

    @field_validator("max_size_mb", "backup_count")
    @classmethod
    def validate_non_negative(cls, v: int) -> int:
        if v < 0:
            raise ValueError("Log rotation settings must not be negative")
        return v
