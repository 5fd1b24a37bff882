from __future__ import annotations

import pytest
from pydantic import ValidationError

from taskboard.automation.engine import AutomationEngine, TriggerContext
from taskboard.automation.rules import AutomationRuleService
from taskboard.config import Settings
from taskboard.errors import BoardNotFoundError, PermissionDeniedError, RuleNotFoundError
from taskboard.schemas import AutomationRuleCreateIn, AutomationRuleUpdateIn, log_out, rule_out

from conftest import BOARD, CARD, OWNER
from fakes import InMemoryGateway

MOVED = "CARD_MOVED_TO_LIST"


@pytest.fixture
def service(gateway: InMemoryGateway) -> AutomationRuleService:
  gateway.board_members[(BOARD, "viewer")] = "VIEWER"
  gateway.board_members[(BOARD, "editor")] = "EDITOR"
  gateway.board_members[(BOARD, "admin")] = "ADMIN"
  return AutomationRuleService(gateway, cfg=Settings(automation_log_page_size=2))


def _payload(**overrides: object) -> AutomationRuleCreateIn:
  data: dict[str, object] = {"triggerType": MOVED, "triggerVal": "list-done", "actionType": "MARK_AS_DONE"}
  data.update(overrides)
  return AutomationRuleCreateIn(**data)


@pytest.mark.anyio
async def test_editor_creates_rule(service: AutomationRuleService, gateway: InMemoryGateway) -> None:
  rule = await service.create_rule("editor", BOARD, _payload(actionType="ADD_LABEL", actionVal=" lbl-1 "))

  out = rule_out(rule)
  assert out.boardId == BOARD
  assert out.triggerType == MOVED
  assert out.actionType == "ADD_LABEL"
  assert out.actionVal == "lbl-1"
  assert out.isActive is True
  assert gateway.rules == [rule]


@pytest.mark.anyio
async def test_viewer_cannot_create_rule(service: AutomationRuleService, gateway: InMemoryGateway) -> None:
  with pytest.raises(PermissionDeniedError) as exc:
    await service.create_rule("viewer", BOARD, _payload())
  assert exc.value.role == "VIEWER"
  assert exc.value.message == "VIEWERs cannot modify this resource"
  assert gateway.rules == []


@pytest.mark.anyio
async def test_missing_board_is_not_found(service: AutomationRuleService) -> None:
  with pytest.raises(BoardNotFoundError):
    await service.list_rules(OWNER, "no-such-board")


@pytest.mark.anyio
async def test_stranger_is_denied_not_not_found(service: AutomationRuleService) -> None:
  with pytest.raises(PermissionDeniedError) as exc:
    await service.list_rules("stranger", BOARD)
  assert exc.value.role is None
  assert exc.value.message == "You do not have access to this board"


@pytest.mark.anyio
async def test_list_rules_newest_first(service: AutomationRuleService) -> None:
  first = await service.create_rule(OWNER, BOARD, _payload())
  second = await service.create_rule(OWNER, BOARD, _payload(triggerVal="list-other"))

  rules = await service.list_rules("viewer", BOARD)

  assert [r.id for r in rules] == [second.id, first.id]


@pytest.mark.anyio
async def test_update_rule_is_partial(service: AutomationRuleService) -> None:
  rule = await service.create_rule(OWNER, BOARD, _payload(actionType="MOVE_CARD", actionVal="list-a"))

  updated = await service.update_rule("editor", BOARD, rule.id, AutomationRuleUpdateIn(isActive=False))

  assert updated.is_active is False
  assert updated.action_type == "MOVE_CARD"
  assert updated.action_val == "list-a"

  updated = await service.update_rule("editor", BOARD, rule.id, AutomationRuleUpdateIn(actionType="ARCHIVE_CARD", actionVal=""))
  assert updated.action_type == "ARCHIVE_CARD"
  assert updated.action_val is None


@pytest.mark.anyio
async def test_update_rule_from_other_board_is_not_found(service: AutomationRuleService, gateway: InMemoryGateway) -> None:
  other_board = gateway.add_board(OWNER, board_id="board-2")
  foreign = gateway.add_rule(other_board, trigger_type=MOVED, trigger_val="x", action_type="ARCHIVE_CARD")

  with pytest.raises(RuleNotFoundError):
    await service.update_rule(OWNER, BOARD, foreign.id, AutomationRuleUpdateIn(isActive=False))
  assert foreign.is_active is True


@pytest.mark.anyio
async def test_delete_requires_delete_permission(service: AutomationRuleService, gateway: InMemoryGateway) -> None:
  rule = await service.create_rule(OWNER, BOARD, _payload())

  with pytest.raises(PermissionDeniedError) as exc:
    await service.delete_rule("editor", BOARD, rule.id)
  assert exc.value.message == "EDITORs cannot delete this resource"

  await service.delete_rule("admin", BOARD, rule.id)
  assert gateway.rules == []

  with pytest.raises(RuleNotFoundError):
    await service.delete_rule("admin", BOARD, rule.id)


@pytest.mark.anyio
async def test_list_logs_is_limited_and_newest_first(service: AutomationRuleService, gateway: InMemoryGateway) -> None:
  await service.create_rule(OWNER, BOARD, _payload(actionType="ADD_LABEL"))
  engine = AutomationEngine(gateway, cfg=Settings())
  for _ in range(3):
    await engine.process_trigger(BOARD, MOVED, "list-done", TriggerContext(card_id=CARD))

  logs = await service.list_logs("viewer", BOARD)

  assert len(logs) == 2
  assert logs[0].created_at > logs[1].created_at
  assert log_out(logs[0]).status == "FAILURE"
  assert len(await service.list_logs("viewer", BOARD, limit=10)) == 3


def test_payload_rejects_unknown_types() -> None:
  with pytest.raises(ValidationError):
    _payload(triggerType="CARD_DELETED")
  with pytest.raises(ValidationError):
    _payload(actionType="SEND_PIGEON")
