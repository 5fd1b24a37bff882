from __future__ import annotations

import logging

from taskboard.config import Settings, settings as default_settings

ROOT_LOGGER_NAME = "taskboard"


def configure_logging(cfg: Settings | None = None) -> logging.Logger:
  cfg = cfg or default_settings
  logging.basicConfig(level=cfg.log_level_value(), format=cfg.log_format)
  root = logging.getLogger(ROOT_LOGGER_NAME)
  root.setLevel(cfg.log_level_value())
  return root


def get_logger(name: str) -> logging.Logger:
  # Module loggers hang off the "taskboard" tree so one level setting covers them.
  if name == ROOT_LOGGER_NAME or name.startswith(f"{ROOT_LOGGER_NAME}."):
    return logging.getLogger(name)
  return logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}")
