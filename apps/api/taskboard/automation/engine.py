"""
Automation engine: runs a board's active rules against a card event.

`process_trigger` never raises. Each matching rule produces exactly one
AutomationLog row (SUCCESS or FAILURE); rules whose trigger value does not
match produce none. A rule's card mutation and its SUCCESS row share one
gateway transaction, so a rolled-back action is never logged as a success.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime

from taskboard.automation.actions import (
  Action,
  AddLabel,
  ArchiveCard,
  AssignMember,
  MarkAsDone,
  MoveCard,
  RemoveLabel,
  SetDueDate,
  TriggerType,
  UnknownAction,
  parse_action,
)
from taskboard.config import Settings, settings as default_settings
from taskboard.errors import AutomationPreconditionError
from taskboard.gateway import PersistenceGateway
from taskboard.log import get_logger
from taskboard.models import AutomationRule, utcnow

logger = get_logger(__name__)

STATUS_SUCCESS = "SUCCESS"
STATUS_FAILURE = "FAILURE"


@dataclass(frozen=True)
class TriggerContext:
  card_id: str


@dataclass(frozen=True)
class ActionOutcome:
  status: str
  message: str


class AutomationEngine:
  """
  Runs automation rules through a gateway.

  With `SqlGateway`, `process_trigger` commits the request session once per
  executed rule. Changes the caller has flushed but not committed are
  committed along with the first rule, so triggers belong after the caller's
  own writes are complete.
  """

  def __init__(
    self,
    gateway: PersistenceGateway,
    *,
    clock: Callable[[], datetime] = utcnow,
    cfg: Settings | None = None,
  ) -> None:
    self.gateway = gateway
    self.clock = clock
    self.cfg = cfg or default_settings

  async def process_trigger(
    self,
    board_id: str,
    trigger_type: TriggerType | str,
    trigger_value: str,
    context: TriggerContext,
  ) -> None:
    trigger = trigger_type.value if isinstance(trigger_type, TriggerType) else str(trigger_type)
    if not self.cfg.automation_enabled:
      logger.debug("Automation disabled; ignoring %s on board %s", trigger, board_id)
      return

    try:
      rules = await self.gateway.list_active_rules(board_id, trigger)
      logger.debug("Trigger %s=%r on board %s: %d active rules", trigger, trigger_value, board_id, len(rules))
      for rule in rules:
        if rule.trigger_val != trigger_value:
          logger.debug("Rule %s skipped: %r != %r", rule.id, rule.trigger_val, trigger_value)
          continue
        await self._run_rule(rule, context)
    except Exception:
      logger.exception("Automation processing failed for %s on board %s", trigger, board_id)

  async def _run_rule(self, rule: AutomationRule, context: TriggerContext) -> None:
    try:
      async with self.gateway.transaction():
        outcome = await self._execute(parse_action(rule.action_type, rule.action_val), context)
        await self.gateway.add_automation_log(rule.id, outcome.status, outcome.message)
      return
    except AutomationPreconditionError as e:
      message = str(e)
    except Exception as e:
      logger.exception("Automation action failed for rule %s", rule.id)
      message = str(e) or type(e).__name__

    try:
      async with self.gateway.transaction():
        await self.gateway.add_automation_log(rule.id, STATUS_FAILURE, message)
    except Exception:
      logger.exception("Could not record failure of automation rule %s", rule.id)

  async def _execute(self, action: Action, context: TriggerContext) -> ActionOutcome:
    card_id = context.card_id
    if isinstance(action, ArchiveCard):
      await self.gateway.set_card_archived(card_id)
      return ActionOutcome(STATUS_SUCCESS, f"Card {card_id} archived.")
    if isinstance(action, MarkAsDone):
      await self.gateway.set_card_done(card_id)
      return ActionOutcome(STATUS_SUCCESS, f"Card {card_id} marked as done.")
    if isinstance(action, AddLabel):
      if await self.gateway.attach_label(card_id, action.label_id):
        return ActionOutcome(STATUS_SUCCESS, f"Label {action.label_id} added to card.")
      return ActionOutcome(STATUS_SUCCESS, f"Label {action.label_id} already on card.")
    if isinstance(action, MoveCard):
      await self.gateway.set_card_list(card_id, action.target_list_id)
      return ActionOutcome(STATUS_SUCCESS, f"Card moved to list {action.target_list_id}.")
    if isinstance(action, AssignMember):
      if await self.gateway.attach_member(card_id, action.user_id):
        return ActionOutcome(STATUS_SUCCESS, f"User {action.user_id} assigned to card.")
      return ActionOutcome(STATUS_SUCCESS, f"User {action.user_id} already assigned to card.")
    if isinstance(action, SetDueDate):
      await self.gateway.set_card_due_date(card_id, action.resolve(self.clock()))
      return ActionOutcome(STATUS_SUCCESS, f"Due date set to {action.display}.")
    if isinstance(action, RemoveLabel):
      await self.gateway.detach_label(card_id, action.label_id)
      return ActionOutcome(STATUS_SUCCESS, f"Label {action.label_id} removed.")
    if isinstance(action, UnknownAction):
      return ActionOutcome(STATUS_FAILURE, f"Unknown action type: {action.action_type}")
    raise TypeError(f"Unhandled automation action {action!r}")
