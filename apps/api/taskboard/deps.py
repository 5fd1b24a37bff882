from __future__ import annotations

from fastapi import Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from taskboard.automation.engine import AutomationEngine
from taskboard.db import get_db
from taskboard.gateway import PersistenceGateway, SqlGateway
from taskboard.permissions import Permission, PermissionResolver, describe_denial


async def get_gateway(db: AsyncSession = Depends(get_db)) -> SqlGateway:
  return SqlGateway(db)


async def get_resolver(gateway: SqlGateway = Depends(get_gateway)) -> PermissionResolver:
  return PermissionResolver(gateway)


async def get_automation_engine(gateway: SqlGateway = Depends(get_gateway)) -> AutomationEngine:
  return AutomationEngine(gateway)


async def require_board_permission(
  board_id: str,
  permission: Permission,
  user_id: str,
  *,
  resolver: PermissionResolver,
  gateway: PersistenceGateway,
) -> str:
  result = await resolver.resolve_permission(user_id, board_id, permission)
  if result.allowed:
    return result.role or ""
  # The resolver reports a missing board as a plain denial; tell them apart here.
  if result.role is None and not await gateway.board_exists(board_id):
    raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Board not found")
  raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=describe_denial(result.role, permission))
