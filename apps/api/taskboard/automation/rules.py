from __future__ import annotations

from typing import Any

from taskboard.config import Settings, settings as default_settings
from taskboard.errors import BoardNotFoundError, PermissionDeniedError, RuleNotFoundError
from taskboard.gateway import PersistenceGateway
from taskboard.log import get_logger
from taskboard.models import AutomationLog, AutomationRule
from taskboard.permissions import Permission, PermissionResolver, describe_denial
from taskboard.schemas import AutomationRuleCreateIn, AutomationRuleUpdateIn

logger = get_logger(__name__)

_UPDATE_FIELDS = {
  "triggerType": "trigger_type",
  "triggerVal": "trigger_val",
  "actionType": "action_type",
  "actionVal": "action_val",
  "isActive": "is_active",
}


def _column_value(value: Any) -> Any:
  return getattr(value, "value", value)


class AutomationRuleService:
  """Board-scoped management of automation rules and their execution logs."""

  def __init__(
    self,
    gateway: PersistenceGateway,
    resolver: PermissionResolver | None = None,
    *,
    cfg: Settings | None = None,
  ) -> None:
    self.gateway = gateway
    self.resolver = resolver or PermissionResolver(gateway)
    self.cfg = cfg or default_settings

  async def _require(self, user_id: str, board_id: str, permission: Permission) -> str:
    result = await self.resolver.resolve_permission(user_id, board_id, permission)
    if result.allowed:
      return result.role or ""
    if result.role is None and not await self.gateway.board_exists(board_id):
      raise BoardNotFoundError(board_id)
    raise PermissionDeniedError(
      role=result.role,
      permission=permission.value,
      message=describe_denial(result.role, permission),
    )

  async def _board_rule(self, board_id: str, rule_id: str) -> AutomationRule:
    rule = await self.gateway.get_rule(rule_id)
    if rule is None or rule.board_id != board_id:
      raise RuleNotFoundError(rule_id)
    return rule

  async def list_rules(self, user_id: str, board_id: str) -> list[AutomationRule]:
    await self._require(user_id, board_id, Permission.READ)
    return await self.gateway.list_rules(board_id)

  async def create_rule(self, user_id: str, board_id: str, payload: AutomationRuleCreateIn) -> AutomationRule:
    await self._require(user_id, board_id, Permission.EDIT)
    rule = await self.gateway.create_rule(
      board_id,
      {
        "trigger_type": payload.triggerType.value,
        "trigger_val": payload.triggerVal,
        "action_type": payload.actionType.value,
        "action_val": payload.actionVal,
        "is_active": payload.isActive,
      },
    )
    logger.info("Automation rule %s created on board %s by %s", rule.id, board_id, user_id)
    return rule

  async def update_rule(
    self,
    user_id: str,
    board_id: str,
    rule_id: str,
    payload: AutomationRuleUpdateIn,
  ) -> AutomationRule:
    await self._require(user_id, board_id, Permission.EDIT)
    current = await self._board_rule(board_id, rule_id)
    data = payload.model_dump(exclude_unset=True)
    values = {_UPDATE_FIELDS[k]: _column_value(v) for k, v in data.items() if k in _UPDATE_FIELDS}
    # triggerVal is NOT NULL; an explicit null means "match the empty value".
    if "trigger_val" in values and values["trigger_val"] is None:
      values["trigger_val"] = ""
    for key in ("trigger_type", "action_type", "is_active"):
      if key in values and values[key] is None:
        del values[key]
    if not values:
      return current
    rule = await self.gateway.update_rule(rule_id, values)
    logger.info("Automation rule %s updated on board %s by %s", rule_id, board_id, user_id)
    return rule

  async def delete_rule(self, user_id: str, board_id: str, rule_id: str) -> None:
    await self._require(user_id, board_id, Permission.DELETE)
    await self._board_rule(board_id, rule_id)
    await self.gateway.delete_rule(rule_id)
    logger.info("Automation rule %s deleted from board %s by %s", rule_id, board_id, user_id)

  async def list_logs(self, user_id: str, board_id: str, *, limit: int | None = None) -> list[AutomationLog]:
    await self._require(user_id, board_id, Permission.READ)
    n = self.cfg.automation_log_page_size if limit is None else max(1, min(int(limit), 500))
    return await self.gateway.list_logs(board_id, limit=n)
