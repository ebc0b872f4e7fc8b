# event_workflow/config/settings.py

from functools import lru_cache
from typing import Literal, Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class WorkflowSettings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # --- Application ---
    app_name: str = "event-workflow"
    environment: Literal["dev", "test", "prod"] = "dev"
    debug: bool = False
    version: str = "0.1.0"

    # --- Database ---
    database_url: str = "sqlite+aiosqlite:///./event_workflow.db"

    # --- Redis (per-event locks across nodes) ---
    redis_url: Optional[str] = None

    # --- Messaging ---
    rabbitmq_url: Optional[str] = None
    status_exchange: str = "event_status"

    # --- Workflow writes ---
    storage_timeout_seconds: float = Field(5.0, gt=0)
    lock_ttl_seconds: int = Field(30, ge=1)
    lock_wait_seconds: float = Field(2.0, ge=0)
    lock_poll_interval_seconds: float = Field(0.05, gt=0)

    # --- Observability ---
    enable_metrics: bool = True
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"


@lru_cache
def get_settings() -> WorkflowSettings:
    return WorkflowSettings()
