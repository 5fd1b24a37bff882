"""init

Revision ID: 0001_init
Revises:
Create Date: 2026-10-18
"""

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

revision = "0001_init"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
  op.create_table(
    "users",
    sa.Column("id", postgresql.UUID(as_uuid=False), primary_key=True),
    sa.Column("email", sa.String(), nullable=False),
    sa.Column("name", sa.String(), nullable=True),
    sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
  )
  op.create_index("ix_users_email", "users", ["email"], unique=True)

  op.create_table(
    "workspaces",
    sa.Column("id", postgresql.UUID(as_uuid=False), primary_key=True),
    sa.Column("title", sa.String(), nullable=False),
    sa.Column("description", sa.Text(), nullable=True),
    sa.Column("owner_id", postgresql.UUID(as_uuid=False), sa.ForeignKey("users.id"), nullable=False),
    sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
    sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
  )
  op.create_index("ix_workspaces_owner_id", "workspaces", ["owner_id"], unique=False)

  op.create_table(
    "workspace_members",
    sa.Column("id", postgresql.UUID(as_uuid=False), primary_key=True),
    sa.Column("workspace_id", postgresql.UUID(as_uuid=False), sa.ForeignKey("workspaces.id"), nullable=False),
    sa.Column("user_id", postgresql.UUID(as_uuid=False), sa.ForeignKey("users.id"), nullable=False),
    sa.Column("role", sa.String(), nullable=False),
    sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
    sa.UniqueConstraint("workspace_id", "user_id", name="ux_workspace_member_workspace_user"),
  )

  op.create_table(
    "boards",
    sa.Column("id", postgresql.UUID(as_uuid=False), primary_key=True),
    sa.Column("title", sa.String(), nullable=False),
    sa.Column("owner_id", postgresql.UUID(as_uuid=False), sa.ForeignKey("users.id"), nullable=False),
    sa.Column("workspace_id", postgresql.UUID(as_uuid=False), sa.ForeignKey("workspaces.id"), nullable=True),
    sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
    sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
  )
  op.create_index("ix_boards_owner_id", "boards", ["owner_id"], unique=False)
  op.create_index("ix_boards_workspace_id", "boards", ["workspace_id"], unique=False)

  op.create_table(
    "board_members",
    sa.Column("id", postgresql.UUID(as_uuid=False), primary_key=True),
    sa.Column("board_id", postgresql.UUID(as_uuid=False), sa.ForeignKey("boards.id"), nullable=False),
    sa.Column("user_id", postgresql.UUID(as_uuid=False), sa.ForeignKey("users.id"), nullable=False),
    sa.Column("role", sa.String(), nullable=False),
    sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
    sa.UniqueConstraint("board_id", "user_id", name="ux_board_member_board_user"),
  )

  op.create_table(
    "lists",
    sa.Column("id", postgresql.UUID(as_uuid=False), primary_key=True),
    sa.Column("board_id", postgresql.UUID(as_uuid=False), sa.ForeignKey("boards.id"), nullable=False),
    sa.Column("title", sa.String(), nullable=False),
    sa.Column("position", sa.Integer(), nullable=False),
    sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
  )
  op.create_index("ix_lists_board_id", "lists", ["board_id"], unique=False)

  op.create_table(
    "cards",
    sa.Column("id", postgresql.UUID(as_uuid=False), primary_key=True),
    sa.Column("list_id", postgresql.UUID(as_uuid=False), sa.ForeignKey("lists.id"), nullable=False),
    sa.Column("title", sa.String(), nullable=False),
    sa.Column("content", sa.Text(), nullable=True),
    sa.Column("position", sa.Integer(), nullable=False),
    sa.Column("archived", sa.Boolean(), nullable=False, server_default=sa.false()),
    sa.Column("is_done", sa.Boolean(), nullable=False, server_default=sa.false()),
    sa.Column("due_date", sa.DateTime(timezone=True), nullable=True),
    sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
    sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
  )
  op.create_index("ix_cards_list_id", "cards", ["list_id"], unique=False)

  op.create_table(
    "labels",
    sa.Column("id", postgresql.UUID(as_uuid=False), primary_key=True),
    sa.Column("board_id", postgresql.UUID(as_uuid=False), sa.ForeignKey("boards.id"), nullable=False),
    sa.Column("name", sa.String(), nullable=False),
    sa.Column("color", sa.String(), nullable=False),
  )
  op.create_index("ix_labels_board_id", "labels", ["board_id"], unique=False)

  op.create_table(
    "card_labels",
    sa.Column("id", postgresql.UUID(as_uuid=False), primary_key=True),
    sa.Column("card_id", postgresql.UUID(as_uuid=False), sa.ForeignKey("cards.id"), nullable=False),
    sa.Column("label_id", postgresql.UUID(as_uuid=False), sa.ForeignKey("labels.id"), nullable=False),
    sa.UniqueConstraint("card_id", "label_id", name="ux_card_label_card_label"),
  )

  op.create_table(
    "card_members",
    sa.Column("id", postgresql.UUID(as_uuid=False), primary_key=True),
    sa.Column("card_id", postgresql.UUID(as_uuid=False), sa.ForeignKey("cards.id"), nullable=False),
    sa.Column("user_id", postgresql.UUID(as_uuid=False), sa.ForeignKey("users.id"), nullable=False),
    sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
    sa.UniqueConstraint("card_id", "user_id", name="ux_card_member_card_user"),
  )

  op.create_table(
    "automation_rules",
    sa.Column("id", postgresql.UUID(as_uuid=False), primary_key=True),
    sa.Column("board_id", postgresql.UUID(as_uuid=False), sa.ForeignKey("boards.id"), nullable=False),
    sa.Column("trigger_type", sa.String(), nullable=False),
    sa.Column("trigger_val", sa.String(), nullable=False),
    sa.Column("action_type", sa.String(), nullable=False),
    sa.Column("action_val", sa.String(), nullable=True),
    sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.true()),
    sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
    sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
  )
  op.create_index("ix_automation_rules_board_id", "automation_rules", ["board_id"], unique=False)

  op.create_table(
    "automation_logs",
    sa.Column("id", postgresql.UUID(as_uuid=False), primary_key=True),
    sa.Column(
      "rule_id",
      postgresql.UUID(as_uuid=False),
      sa.ForeignKey("automation_rules.id", ondelete="CASCADE"),
      nullable=False,
    ),
    sa.Column("status", sa.String(), nullable=False),
    sa.Column("message", sa.Text(), nullable=False),
    sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
  )
  op.create_index("ix_automation_logs_rule_id", "automation_logs", ["rule_id"], unique=False)


def downgrade() -> None:
  op.drop_table("automation_logs")
  op.drop_table("automation_rules")
  op.drop_table("card_members")
  op.drop_table("card_labels")
  op.drop_table("labels")
  op.drop_table("cards")
  op.drop_table("lists")
  op.drop_table("board_members")
  op.drop_table("boards")
  op.drop_table("workspace_members")
  op.drop_table("workspaces")
  op.drop_table("users")
