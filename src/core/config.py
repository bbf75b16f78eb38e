"""Configuration management"""
import os
from pathlib import Path
from typing import Optional
from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

class Settings(BaseSettings):
    # Environment
    environment: str = "development"
    log_level: str = "INFO"

    # Agent service
    agent_api_key: Optional[str] = None
    agent_api_base: str = "https://agents.example.com/v1"
    # Request timeout (seconds). Discovery runs can take minutes on the agent side.
    agent_request_timeout: float = 300.0
    discovery_agent_id: str = "699dce56c546a473136807dc"
    report_agent_id: str = "699dce67c546a473136807de"

    # Storage (async SQLAlchemy URL). Defaults to a SQLite file in data_dir.
    database_url: Optional[str] = None
    storage_key_prefix: str = "ciHub_"

    # Dashboard auth (HTTP Basic)
    dashboard_username: str = "admin"
    dashboard_password: str = "radar"

    # Paths
    project_root: Path = Field(default_factory=lambda: Path(__file__).parent.parent.parent)
    data_dir: Optional[Path] = None
    logs_dir: Optional[Path] = None

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    @field_validator('database_url')
    @classmethod
    def validate_async_url(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return v
        if v.startswith("sqlite://") and "aiosqlite" not in v:
            v = v.replace("sqlite://", "sqlite+aiosqlite://", 1)
        if not v.startswith("sqlite+aiosqlite://"):
            raise ValueError(
                f"Only SQLite is supported for the local store. Got: {v[:30]}... "
                "Set DATABASE_URL=sqlite+aiosqlite:///path/to/intel_hub.db"
            )
        return v

    @model_validator(mode='after')
    def setup_paths_and_fallbacks(self):
        if self.data_dir is None:
            self.data_dir = self.project_root / "data"
        if self.logs_dir is None:
            self.logs_dir = self.project_root / "logs"

        self.data_dir.mkdir(exist_ok=True, parents=True)
        self.logs_dir.mkdir(exist_ok=True, parents=True)

        if self.database_url is None:
            self.database_url = f"sqlite+aiosqlite:///{self.data_dir / 'intel_hub.db'}"

        return self

    @field_validator('agent_api_key')
    @classmethod
    def validate_agent_key(cls, v: Optional[str]) -> Optional[str]:
        # Local runs may go without a key (agent calls then fail softly).
        if v is None and os.getenv("ENVIRONMENT") == "production":
             raise ValueError("AGENT_API_KEY must be set in production")
        return v

# Instantiate settings
settings = Settings()
