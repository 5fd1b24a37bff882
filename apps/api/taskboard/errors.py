from __future__ import annotations


class TaskboardError(RuntimeError):
  pass


class BoardNotFoundError(TaskboardError):
  def __init__(self, board_id: str) -> None:
    super().__init__(f"Board {board_id} not found")
    self.board_id = board_id


class PermissionDeniedError(TaskboardError):
  def __init__(self, *, role: str | None, permission: str, message: str) -> None:
    super().__init__(message)
    self.role = role
    self.permission = permission
    self.message = message


class RuleNotFoundError(TaskboardError):
  def __init__(self, rule_id: str) -> None:
    super().__init__(f"Automation rule {rule_id} not found")
    self.rule_id = rule_id


class AutomationPreconditionError(TaskboardError):
  pass


class CardNotFoundError(TaskboardError):
  def __init__(self, card_id: str) -> None:
    super().__init__(f"Card {card_id} not found")
    self.card_id = card_id
