from __future__ import annotations

import uuid
from datetime import datetime, timezone

from sqlalchemy import Boolean, DateTime, ForeignKey, Integer, String, Text, UniqueConstraint
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


def utcnow() -> datetime:
  return datetime.now(timezone.utc)


def _uuid() -> str:
  return str(uuid.uuid4())


class Base(DeclarativeBase):
  pass


class User(Base):
  __tablename__ = "users"

  id: Mapped[str] = mapped_column(UUID(as_uuid=False), primary_key=True, default=_uuid)
  email: Mapped[str] = mapped_column(String, nullable=False, unique=True, index=True)
  name: Mapped[str | None] = mapped_column(String, nullable=True)
  created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow, nullable=False)


class Workspace(Base):
  __tablename__ = "workspaces"

  id: Mapped[str] = mapped_column(UUID(as_uuid=False), primary_key=True, default=_uuid)
  title: Mapped[str] = mapped_column(String, nullable=False)
  description: Mapped[str | None] = mapped_column(Text, nullable=True)
  owner_id: Mapped[str] = mapped_column(UUID(as_uuid=False), ForeignKey("users.id"), nullable=False, index=True)
  created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow, nullable=False)
  updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False)


class WorkspaceMember(Base):
  __tablename__ = "workspace_members"
  __table_args__ = (UniqueConstraint("workspace_id", "user_id", name="ux_workspace_member_workspace_user"),)

  id: Mapped[str] = mapped_column(UUID(as_uuid=False), primary_key=True, default=_uuid)
  workspace_id: Mapped[str] = mapped_column(UUID(as_uuid=False), ForeignKey("workspaces.id"), nullable=False)
  user_id: Mapped[str] = mapped_column(UUID(as_uuid=False), ForeignKey("users.id"), nullable=False)
  role: Mapped[str] = mapped_column(String, nullable=False, default="VIEWER")
  created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow, nullable=False)


class Board(Base):
  __tablename__ = "boards"

  id: Mapped[str] = mapped_column(UUID(as_uuid=False), primary_key=True, default=_uuid)
  title: Mapped[str] = mapped_column(String, nullable=False)
  owner_id: Mapped[str] = mapped_column(UUID(as_uuid=False), ForeignKey("users.id"), nullable=False, index=True)
  workspace_id: Mapped[str | None] = mapped_column(
    UUID(as_uuid=False), ForeignKey("workspaces.id"), nullable=True, index=True
  )
  created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow, nullable=False)
  updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False)


class BoardMember(Base):
  __tablename__ = "board_members"
  __table_args__ = (UniqueConstraint("board_id", "user_id", name="ux_board_member_board_user"),)

  id: Mapped[str] = mapped_column(UUID(as_uuid=False), primary_key=True, default=_uuid)
  board_id: Mapped[str] = mapped_column(UUID(as_uuid=False), ForeignKey("boards.id"), nullable=False)
  user_id: Mapped[str] = mapped_column(UUID(as_uuid=False), ForeignKey("users.id"), nullable=False)
  role: Mapped[str] = mapped_column(String, nullable=False, default="VIEWER")
  created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow, nullable=False)


class BoardList(Base):
  __tablename__ = "lists"

  id: Mapped[str] = mapped_column(UUID(as_uuid=False), primary_key=True, default=_uuid)
  board_id: Mapped[str] = mapped_column(UUID(as_uuid=False), ForeignKey("boards.id"), nullable=False, index=True)
  title: Mapped[str] = mapped_column(String, nullable=False)
  position: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
  created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow, nullable=False)


class Card(Base):
  __tablename__ = "cards"

  id: Mapped[str] = mapped_column(UUID(as_uuid=False), primary_key=True, default=_uuid)
  list_id: Mapped[str] = mapped_column(UUID(as_uuid=False), ForeignKey("lists.id"), nullable=False, index=True)
  title: Mapped[str] = mapped_column(String, nullable=False)
  content: Mapped[str | None] = mapped_column(Text, nullable=True)
  position: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
  archived: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
  is_done: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
  due_date: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
  created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow, nullable=False)
  updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False)


class Label(Base):
  __tablename__ = "labels"

  id: Mapped[str] = mapped_column(UUID(as_uuid=False), primary_key=True, default=_uuid)
  board_id: Mapped[str] = mapped_column(UUID(as_uuid=False), ForeignKey("boards.id"), nullable=False, index=True)
  name: Mapped[str] = mapped_column(String, nullable=False)
  color: Mapped[str] = mapped_column(String, nullable=False)


class CardLabel(Base):
  __tablename__ = "card_labels"
  __table_args__ = (UniqueConstraint("card_id", "label_id", name="ux_card_label_card_label"),)

  id: Mapped[str] = mapped_column(UUID(as_uuid=False), primary_key=True, default=_uuid)
  card_id: Mapped[str] = mapped_column(UUID(as_uuid=False), ForeignKey("cards.id"), nullable=False)
  label_id: Mapped[str] = mapped_column(UUID(as_uuid=False), ForeignKey("labels.id"), nullable=False)


class CardMember(Base):
  __tablename__ = "card_members"
  __table_args__ = (UniqueConstraint("card_id", "user_id", name="ux_card_member_card_user"),)

  id: Mapped[str] = mapped_column(UUID(as_uuid=False), primary_key=True, default=_uuid)
  card_id: Mapped[str] = mapped_column(UUID(as_uuid=False), ForeignKey("cards.id"), nullable=False)
  user_id: Mapped[str] = mapped_column(UUID(as_uuid=False), ForeignKey("users.id"), nullable=False)
  created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow, nullable=False)


class AutomationRule(Base):
  __tablename__ = "automation_rules"

  id: Mapped[str] = mapped_column(UUID(as_uuid=False), primary_key=True, default=_uuid)
  board_id: Mapped[str] = mapped_column(UUID(as_uuid=False), ForeignKey("boards.id"), nullable=False, index=True)
  trigger_type: Mapped[str] = mapped_column(String, nullable=False)
  trigger_val: Mapped[str] = mapped_column(String, nullable=False, default="")
  action_type: Mapped[str] = mapped_column(String, nullable=False)
  action_val: Mapped[str | None] = mapped_column(String, nullable=True)
  is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
  created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow, nullable=False)
  updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False)


class AutomationLog(Base):
  __tablename__ = "automation_logs"

  id: Mapped[str] = mapped_column(UUID(as_uuid=False), primary_key=True, default=_uuid)
  rule_id: Mapped[str] = mapped_column(
    UUID(as_uuid=False), ForeignKey("automation_rules.id", ondelete="CASCADE"), nullable=False, index=True
  )
  status: Mapped[str] = mapped_column(String, nullable=False)
  message: Mapped[str] = mapped_column(Text, nullable=False, default="")
  created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow, nullable=False)
