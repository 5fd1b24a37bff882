from __future__ import annotations

import logging

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
  model_config = SettingsConfigDict(env_file=".env", extra="ignore")

  database_url: str = "postgresql+asyncpg://taskboard:taskboard@db:5432/taskboard"
  app_version: str = "v2026-10-18"

  log_level: str = "INFO"
  log_format: str = "%(asctime)s [%(name)s] %(levelname)s %(message)s"

  automation_enabled: bool = True
  automation_log_page_size: int = 50

  def log_level_value(self) -> int:
    return getattr(logging, (self.log_level or "INFO").strip().upper(), logging.INFO)


settings = Settings()
