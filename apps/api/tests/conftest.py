from __future__ import annotations

import sys
from datetime import datetime, timezone
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
  sys.path.insert(0, str(ROOT))

from taskboard.automation.engine import AutomationEngine
from taskboard.config import Settings
from taskboard.permissions import PermissionResolver

from fakes import InMemoryGateway

# Late evening, so "tomorrow" crosses a calendar day only by date arithmetic.
FIXED_NOW = datetime(2026, 3, 14, 23, 45, 10, tzinfo=timezone.utc)

OWNER = "user-owner"
BOARD = "board-1"
WORKSPACE = "workspace-1"
WORKSPACE_OWNER = "user-ws-owner"
CARD = "c1"


@pytest.fixture(scope="session")
def anyio_backend() -> str:
  return "asyncio"


@pytest.fixture
def gateway() -> InMemoryGateway:
  gw = InMemoryGateway()
  gw.add_workspace(WORKSPACE_OWNER, workspace_id=WORKSPACE)
  gw.add_board(OWNER, board_id=BOARD, workspace_id=WORKSPACE)
  gw.add_card(CARD)
  return gw


@pytest.fixture
def resolver(gateway: InMemoryGateway) -> PermissionResolver:
  return PermissionResolver(gateway)


@pytest.fixture
def engine(gateway: InMemoryGateway) -> AutomationEngine:
  return AutomationEngine(gateway, clock=lambda: FIXED_NOW, cfg=Settings(automation_enabled=True))
