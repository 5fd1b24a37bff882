from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from enum import Enum

from dateutil import parser as dateparser

from taskboard.errors import AutomationPreconditionError
from taskboard.log import get_logger

logger = get_logger(__name__)


class TriggerType(str, Enum):
  CARD_MOVED_TO_LIST = "CARD_MOVED_TO_LIST"
  CARD_CREATED = "CARD_CREATED"


class ActionType(str, Enum):
  ARCHIVE_CARD = "ARCHIVE_CARD"
  MARK_AS_DONE = "MARK_AS_DONE"
  ADD_LABEL = "ADD_LABEL"
  MOVE_CARD = "MOVE_CARD"
  ASSIGN_MEMBER = "ASSIGN_MEMBER"
  SET_DUE_DATE = "SET_DUE_DATE"
  REMOVE_LABEL = "REMOVE_LABEL"


class DueDateKeyword(str, Enum):
  TODAY = "TODAY"
  TOMORROW = "TOMORROW"


@dataclass(frozen=True)
class ArchiveCard:
  pass


@dataclass(frozen=True)
class MarkAsDone:
  pass


@dataclass(frozen=True)
class AddLabel:
  label_id: str


@dataclass(frozen=True)
class MoveCard:
  target_list_id: str


@dataclass(frozen=True)
class AssignMember:
  user_id: str


@dataclass(frozen=True)
class SetDueDate:
  keyword: DueDateKeyword | None = DueDateKeyword.TODAY
  literal: str | None = None

  @property
  def display(self) -> str:
    if self.literal is not None:
      return self.literal
    return (self.keyword or DueDateKeyword.TODAY).value

  def resolve(self, now: datetime) -> datetime:
    if self.keyword is DueDateKeyword.TOMORROW:
      return now + timedelta(days=1)
    if self.literal is None:
      return now
    parsed = parse_due_date(self.literal, now=now)
    if parsed is None:
      # Best-effort: an unreadable literal still sets a due date.
      logger.warning("Unparseable due date %r in automation rule; using current date", self.literal)
      return now
    return parsed


@dataclass(frozen=True)
class RemoveLabel:
  label_id: str


@dataclass(frozen=True)
class UnknownAction:
  action_type: str


Action = ArchiveCard | MarkAsDone | AddLabel | MoveCard | AssignMember | SetDueDate | RemoveLabel | UnknownAction


def parse_due_date(value: str, now: datetime | None = None) -> datetime | None:
  s = (value or "").strip()
  if not s:
    return None
  # Fields missing from a partial literal ("12/31") come from midnight of `now`.
  default = None
  if now is not None:
    default = now.astimezone(timezone.utc).replace(hour=0, minute=0, second=0, microsecond=0, tzinfo=None)
  try:
    dt = dateparser.parse(s, default=default)
  except (ValueError, OverflowError):
    return None
  if dt.tzinfo is None:
    return dt.replace(tzinfo=timezone.utc)
  return dt.astimezone(timezone.utc)


def _required(value: str | None, message: str) -> str:
  s = (value or "").strip()
  if not s:
    raise AutomationPreconditionError(message)
  return s


def parse_action(action_type: str, action_val: str | None) -> Action:
  """
  Turn a stored (action_type, action_val) pair into a typed action.

  Raises AutomationPreconditionError when the action needs a value and has none.
  Unrecognized action types come back as UnknownAction rather than raising.
  """
  try:
    kind = ActionType(action_type)
  except ValueError:
    return UnknownAction(action_type=str(action_type))

  if kind is ActionType.ARCHIVE_CARD:
    return ArchiveCard()
  if kind is ActionType.MARK_AS_DONE:
    return MarkAsDone()
  if kind is ActionType.ADD_LABEL:
    return AddLabel(label_id=_required(action_val, "Missing label ID in value for ADD_LABEL."))
  if kind is ActionType.MOVE_CARD:
    return MoveCard(target_list_id=_required(action_val, "Missing List ID for MOVE_CARD"))
  if kind is ActionType.ASSIGN_MEMBER:
    return AssignMember(user_id=_required(action_val, "Missing User ID for ASSIGN_MEMBER"))
  if kind is ActionType.REMOVE_LABEL:
    return RemoveLabel(label_id=_required(action_val, "Missing Label ID for REMOVE_LABEL"))

  raw = (action_val or "").strip()
  if not raw or raw == DueDateKeyword.TODAY.value:
    return SetDueDate(keyword=DueDateKeyword.TODAY)
  if raw == DueDateKeyword.TOMORROW.value:
    return SetDueDate(keyword=DueDateKeyword.TOMORROW)
  return SetDueDate(keyword=None, literal=raw)
