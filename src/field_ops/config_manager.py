"""Configuration Manager for the Field Ops activity engine."""
import os
from typing import Optional, Literal

from appdirs import user_data_dir
from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings


def _default_data_dir():
    return user_data_dir('field_ops', 'FieldOps')


class ConfigManager(BaseSettings):
    """Manages application configuration settings using Pydantic BaseSettings."""

    # Storage settings
    data_dir: str = Field(default_factory=_default_data_dir)
    db_filename: str = 'field_ops.db'
    reports_dir: Optional[str] = None  # defaults to <data_dir>/reports
    directory_file: Optional[str] = None  # JSON file of {homes: [], bookings: []}

    # Auto-save settings
    autosave_interval: float = 30.0  # seconds

    # Upload settings
    upload_mode: Literal['simulated', 'http'] = 'simulated'
    upload_latency: float = 2.0  # seconds, simulated uploads only
    upload_failure_rate: float = 0.0  # simulated uploads only
    upload_timeout: float = 30.0  # seconds per attempt
    upload_retry_attempts: int = 3
    upload_retry_delay: float = 1.0
    upload_workers: int = 4
    api_base_url: str = 'http://localhost:5000'

    # Input limits
    max_notes_length: int = 10000

    # Completion record
    completed_by: str = 'Staff Member'

    class Config:
        env_prefix = 'FIELDOPS_'
        case_sensitive = False
        extra = 'allow'

    @field_validator('*', mode='wrap')
    @classmethod
    def fall_back_to_default(cls, value, handler, info):
        """Invalid values (typically from the environment) keep the field default."""
        try:
            return handler(value)
        except ValidationError:
            field = cls.model_fields.get(info.field_name)
            if field is None:
                raise
            return field.get_default(call_default_factory=True)

    @property
    def reports_path(self):
        return self.reports_dir or os.path.join(self.data_dir, 'reports')

    def db_path(self):
        """Full path of the local SQLite database."""
        return os.path.join(self.data_dir, self.db_filename)

    def get(self, key, default=None):
        """Get a configuration value."""
        return getattr(self, key, default)

    def set(self, key, value):
        """Set a configuration value."""
        setattr(self, key, value)

    def get_all(self):
        """Get all configuration values as dictionary."""
        return self.model_dump()
