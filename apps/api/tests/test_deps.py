from __future__ import annotations

import pytest
from fastapi import HTTPException

from taskboard.automation.engine import AutomationEngine
from taskboard.deps import get_automation_engine, get_resolver, require_board_permission
from taskboard.permissions import Permission, PermissionResolver

from conftest import BOARD, OWNER
from fakes import InMemoryGateway


@pytest.mark.anyio
async def test_allowed_returns_role(gateway: InMemoryGateway, resolver: PermissionResolver) -> None:
  role = await require_board_permission(BOARD, Permission.DELETE, OWNER, resolver=resolver, gateway=gateway)
  assert role == "OWNER"


@pytest.mark.anyio
async def test_missing_board_maps_to_404(gateway: InMemoryGateway, resolver: PermissionResolver) -> None:
  with pytest.raises(HTTPException) as exc:
    await require_board_permission("missing", Permission.READ, OWNER, resolver=resolver, gateway=gateway)
  assert exc.value.status_code == 404
  assert exc.value.detail == "Board not found"


@pytest.mark.anyio
async def test_denied_maps_to_403_with_role_message(gateway: InMemoryGateway, resolver: PermissionResolver) -> None:
  gateway.board_members[(BOARD, "u-editor")] = "EDITOR"
  with pytest.raises(HTTPException) as exc:
    await require_board_permission(BOARD, Permission.ADMIN, "u-editor", resolver=resolver, gateway=gateway)
  assert exc.value.status_code == 403
  assert exc.value.detail == "EDITORs cannot perform administrative actions"


@pytest.mark.anyio
async def test_no_access_maps_to_403(gateway: InMemoryGateway, resolver: PermissionResolver) -> None:
  with pytest.raises(HTTPException) as exc:
    await require_board_permission(BOARD, Permission.READ, "stranger", resolver=resolver, gateway=gateway)
  assert exc.value.status_code == 403
  assert exc.value.detail == "You do not have access to this board"


@pytest.mark.anyio
async def test_dependency_factories_share_the_gateway(gateway: InMemoryGateway) -> None:
  resolver = await get_resolver(gateway)
  engine = await get_automation_engine(gateway)
  assert isinstance(resolver, PermissionResolver) and resolver.gateway is gateway
  assert isinstance(engine, AutomationEngine) and engine.gateway is gateway
