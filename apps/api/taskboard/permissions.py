"""
Board permission resolution.

Effective access to a board is resolved in this order:

- board owner: every permission, role "OWNER"
- board membership row: its role, evaluated with the role table
- workspace membership row: its role, evaluated with the role table
- otherwise: no access

Resolution fails closed: any persistence error is reported as a denial.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from taskboard.gateway import PersistenceGateway
from taskboard.log import get_logger

logger = get_logger(__name__)


class Permission(str, Enum):
  READ = "READ"
  EDIT = "EDIT"
  DELETE = "DELETE"
  ADMIN = "ADMIN"


class Role(str, Enum):
  OWNER = "OWNER"
  ADMIN = "ADMIN"
  EDITOR = "EDITOR"
  VIEWER = "VIEWER"


ROLE_PERMISSIONS: dict[str, frozenset[Permission]] = {
  Role.OWNER.value: frozenset(Permission),
  Role.ADMIN.value: frozenset(Permission),
  Role.EDITOR.value: frozenset({Permission.READ, Permission.EDIT}),
  Role.VIEWER.value: frozenset({Permission.READ}),
}


@dataclass(frozen=True)
class PermissionResult:
  allowed: bool
  role: str | None
  is_owner: bool = False


DENIED = PermissionResult(allowed=False, role=None)


def _permission(value: Permission | str) -> Permission | None:
  try:
    return Permission(value)
  except ValueError:
    return None


def has_permission(role: str | None, required: Permission | str) -> bool:
  perm = _permission(required)
  if role is None or perm is None:
    return False
  return perm in ROLE_PERMISSIONS.get(role, frozenset())


def describe_denial(role: str | None, required: Permission | str) -> str:
  if not role:
    return "You do not have access to this board"
  perm = _permission(required)
  if perm is Permission.READ:
    return "You do not have permission to view this resource"
  if perm is Permission.EDIT:
    return f"{role}s cannot modify this resource"
  if perm is Permission.DELETE:
    return f"{role}s cannot delete this resource"
  if perm is Permission.ADMIN:
    return f"{role}s cannot perform administrative actions"
  return "You do not have permission to perform this action"


class PermissionResolver:
  def __init__(self, gateway: PersistenceGateway) -> None:
    self.gateway = gateway

  async def resolve_permission(
    self,
    user_id: str,
    board_id: str,
    required: Permission | str,
  ) -> PermissionResult:
    try:
      access = await self.gateway.get_board_access(board_id, user_id)
    except Exception:
      logger.exception("Permission lookup failed for board %s; denying access", board_id)
      return DENIED

    if access is None:
      return DENIED

    if access.owner_id == user_id:
      return PermissionResult(allowed=True, role=Role.OWNER.value, is_owner=True)

    # Board membership wins over workspace membership, even when it is weaker.
    if access.board_role is not None:
      return PermissionResult(allowed=has_permission(access.board_role, required), role=access.board_role)

    if access.workspace_role is not None:
      return PermissionResult(allowed=has_permission(access.workspace_role, required), role=access.workspace_role)

    return DENIED
