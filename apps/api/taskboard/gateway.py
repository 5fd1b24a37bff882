"""
Persistence gateway consumed by the permission resolver and the automation engine.

`PersistenceGateway` is the interface both components are constructed with;
`SqlGateway` implements it on top of a request-scoped `AsyncSession`.
"""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import AbstractAsyncContextManager, asynccontextmanager
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Protocol

from sqlalchemy import delete, select, update
from sqlalchemy.dialects.postgresql import insert
from sqlalchemy.ext.asyncio import AsyncSession

from taskboard.errors import CardNotFoundError, RuleNotFoundError
from taskboard.models import (
  AutomationLog,
  AutomationRule,
  Board,
  BoardMember,
  Card,
  CardLabel,
  CardMember,
  WorkspaceMember,
  utcnow,
)


@dataclass(frozen=True)
class BoardAccess:
  board_id: str
  owner_id: str
  workspace_id: str | None = None
  board_role: str | None = None
  workspace_role: str | None = None


class PersistenceGateway(Protocol):
  def transaction(self) -> AbstractAsyncContextManager[None]: ...

  async def board_exists(self, board_id: str) -> bool: ...

  async def get_board_access(self, board_id: str, user_id: str) -> BoardAccess | None: ...

  async def list_active_rules(self, board_id: str, trigger_type: str) -> list[AutomationRule]: ...

  async def list_rules(self, board_id: str) -> list[AutomationRule]: ...

  async def get_rule(self, rule_id: str) -> AutomationRule | None: ...

  async def create_rule(self, board_id: str, values: dict[str, Any]) -> AutomationRule: ...

  async def update_rule(self, rule_id: str, values: dict[str, Any]) -> AutomationRule: ...

  async def delete_rule(self, rule_id: str) -> None: ...

  async def list_logs(self, board_id: str, *, limit: int) -> list[AutomationLog]: ...

  async def add_automation_log(self, rule_id: str, status: str, message: str) -> None: ...

  async def set_card_archived(self, card_id: str) -> None: ...

  async def set_card_done(self, card_id: str) -> None: ...

  async def set_card_list(self, card_id: str, list_id: str) -> None: ...

  async def set_card_due_date(self, card_id: str, due_date: datetime) -> None: ...

  async def attach_label(self, card_id: str, label_id: str) -> bool: ...

  async def detach_label(self, card_id: str, label_id: str) -> bool: ...

  async def attach_member(self, card_id: str, user_id: str) -> bool: ...


class SqlGateway:
  def __init__(self, db: AsyncSession) -> None:
    self.db = db

  @asynccontextmanager
  async def transaction(self) -> AsyncIterator[None]:
    """
    Run the block in a savepoint, then commit the whole session.

    A failure rolls back only the savepoint. On success the commit also
    persists anything the caller had pending on the same session.
    """
    async with self.db.begin_nested():
      yield
    await self.db.commit()

  async def board_exists(self, board_id: str) -> bool:
    res = await self.db.execute(select(Board.id).where(Board.id == board_id))
    return res.scalar_one_or_none() is not None

  async def get_board_access(self, board_id: str, user_id: str) -> BoardAccess | None:
    res = await self.db.execute(
      select(Board.id, Board.owner_id, Board.workspace_id).where(Board.id == board_id)
    )
    row = res.one_or_none()
    if row is None:
      return None

    bres = await self.db.execute(
      select(BoardMember.role).where(BoardMember.board_id == board_id, BoardMember.user_id == user_id)
    )
    board_role = bres.scalar_one_or_none()

    workspace_role = None
    if row.workspace_id is not None:
      wres = await self.db.execute(
        select(WorkspaceMember.role).where(
          WorkspaceMember.workspace_id == row.workspace_id,
          WorkspaceMember.user_id == user_id,
        )
      )
      workspace_role = wres.scalar_one_or_none()

    return BoardAccess(
      board_id=row.id,
      owner_id=row.owner_id,
      workspace_id=row.workspace_id,
      board_role=board_role,
      workspace_role=workspace_role,
    )

  async def list_active_rules(self, board_id: str, trigger_type: str) -> list[AutomationRule]:
    res = await self.db.execute(
      select(AutomationRule)
      .where(
        AutomationRule.board_id == board_id,
        AutomationRule.trigger_type == trigger_type,
        AutomationRule.is_active.is_(True),
      )
      .order_by(AutomationRule.created_at.asc())
    )
    return list(res.scalars().all())

  async def list_rules(self, board_id: str) -> list[AutomationRule]:
    res = await self.db.execute(
      select(AutomationRule).where(AutomationRule.board_id == board_id).order_by(AutomationRule.created_at.desc())
    )
    return list(res.scalars().all())

  async def get_rule(self, rule_id: str) -> AutomationRule | None:
    res = await self.db.execute(select(AutomationRule).where(AutomationRule.id == rule_id))
    return res.scalar_one_or_none()

  async def create_rule(self, board_id: str, values: dict[str, Any]) -> AutomationRule:
    rule = AutomationRule(board_id=board_id, **values)
    self.db.add(rule)
    await self.db.commit()
    return rule

  async def update_rule(self, rule_id: str, values: dict[str, Any]) -> AutomationRule:
    rule = await self.get_rule(rule_id)
    if rule is None:
      raise RuleNotFoundError(rule_id)
    for key, value in values.items():
      setattr(rule, key, value)
    rule.updated_at = utcnow()
    await self.db.commit()
    return rule

  async def delete_rule(self, rule_id: str) -> None:
    await self.db.execute(delete(AutomationLog).where(AutomationLog.rule_id == rule_id))
    await self.db.execute(delete(AutomationRule).where(AutomationRule.id == rule_id))
    await self.db.commit()

  async def list_logs(self, board_id: str, *, limit: int) -> list[AutomationLog]:
    res = await self.db.execute(
      select(AutomationLog)
      .join(AutomationRule, AutomationRule.id == AutomationLog.rule_id)
      .where(AutomationRule.board_id == board_id)
      .order_by(AutomationLog.created_at.desc())
      .limit(int(limit))
    )
    return list(res.scalars().all())

  async def add_automation_log(self, rule_id: str, status: str, message: str) -> None:
    self.db.add(AutomationLog(rule_id=rule_id, status=status, message=message))
    await self.db.flush()

  async def _update_card(self, card_id: str, **values: Any) -> None:
    res = await self.db.execute(update(Card).where(Card.id == card_id).values(updated_at=utcnow(), **values))
    if res.rowcount == 0:
      raise CardNotFoundError(card_id)

  async def set_card_archived(self, card_id: str) -> None:
    await self._update_card(card_id, archived=True)

  async def set_card_done(self, card_id: str) -> None:
    await self._update_card(card_id, is_done=True)

  async def set_card_list(self, card_id: str, list_id: str) -> None:
    await self._update_card(card_id, list_id=list_id)

  async def set_card_due_date(self, card_id: str, due_date: datetime) -> None:
    await self._update_card(card_id, due_date=due_date)

  async def attach_label(self, card_id: str, label_id: str) -> bool:
    stmt = (
      insert(CardLabel)
      .values(card_id=card_id, label_id=label_id)
      .on_conflict_do_nothing(index_elements=["card_id", "label_id"])
    )
    res = await self.db.execute(stmt)
    return bool(res.rowcount)

  async def detach_label(self, card_id: str, label_id: str) -> bool:
    res = await self.db.execute(delete(CardLabel).where(CardLabel.card_id == card_id, CardLabel.label_id == label_id))
    return bool(res.rowcount)

  async def attach_member(self, card_id: str, user_id: str) -> bool:
    stmt = (
      insert(CardMember)
      .values(card_id=card_id, user_id=user_id)
      .on_conflict_do_nothing(index_elements=["card_id", "user_id"])
    )
    res = await self.db.execute(stmt)
    return bool(res.rowcount)
