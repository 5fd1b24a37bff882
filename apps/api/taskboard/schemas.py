from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field, field_validator

from taskboard.automation.actions import ActionType, TriggerType
from taskboard.models import AutomationLog, AutomationRule


def _strip_optional(value: object) -> object:
  if isinstance(value, str):
    s = value.strip()
    return s or None
  return value


class AutomationRuleCreateIn(BaseModel):
  triggerType: TriggerType
  triggerVal: str = Field(default="", max_length=256)
  actionType: ActionType
  actionVal: str | None = Field(default=None, max_length=256)
  isActive: bool = True

  @field_validator("triggerVal", mode="before")
  @classmethod
  def _trigger_val(cls, value: object) -> object:
    return "" if value is None else value

  @field_validator("actionVal", mode="before")
  @classmethod
  def _action_val(cls, value: object) -> object:
    return _strip_optional(value)


class AutomationRuleUpdateIn(BaseModel):
  triggerType: TriggerType | None = None
  triggerVal: str | None = Field(default=None, max_length=256)
  actionType: ActionType | None = None
  actionVal: str | None = Field(default=None, max_length=256)
  isActive: bool | None = None

  @field_validator("actionVal", mode="before")
  @classmethod
  def _action_val(cls, value: object) -> object:
    return _strip_optional(value)


class AutomationRuleOut(BaseModel):
  id: str
  boardId: str
  triggerType: str
  triggerVal: str
  actionType: str
  actionVal: str | None = None
  isActive: bool
  createdAt: datetime
  updatedAt: datetime


class AutomationLogOut(BaseModel):
  id: str
  ruleId: str
  status: str
  message: str
  createdAt: datetime


def rule_out(r: AutomationRule) -> AutomationRuleOut:
  return AutomationRuleOut(
    id=r.id,
    boardId=r.board_id,
    triggerType=r.trigger_type,
    triggerVal=r.trigger_val,
    actionType=r.action_type,
    actionVal=r.action_val,
    isActive=r.is_active,
    createdAt=r.created_at,
    updatedAt=r.updated_at,
  )


def log_out(entry: AutomationLog) -> AutomationLogOut:
  return AutomationLogOut(
    id=entry.id,
    ruleId=entry.rule_id,
    status=entry.status,
    message=entry.message,
    createdAt=entry.created_at,
  )
