from __future__ import annotations

from typing import Iterable


class FinboardError(Exception):
    """Base class for domain errors raised by services."""


class EntityNotFoundError(FinboardError):
    def __init__(self, entity: str, entity_id: str):
        super().__init__(f"{entity} {entity_id} not found")
        self.entity = entity
        self.entity_id = entity_id


class InvalidTransitionError(FinboardError):
    """A status change was requested from a state that does not allow it."""

    def __init__(self, entity: str, current: str, target: str, allowed_from: Iterable[str]):
        allowed = sorted(set(allowed_from))
        super().__init__(
            f"{entity} cannot move from {current!r} to {target!r} (allowed from: {', '.join(allowed)})"
        )
        self.entity = entity
        self.current = current
        self.target = target
        self.allowed_from = allowed
