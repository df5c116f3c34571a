"""Errors raised by the repositories.

Pure metric computations never raise: missing data is returned as ``None``.
"""

from __future__ import annotations

import uuid


class RepLedgerError(Exception):
    """Base class for all RepLedger errors."""


class NotFoundError(RepLedgerError):
    """A referenced entity does not exist."""

    def __init__(self, kind: str, entity_id: uuid.UUID | str):
        super().__init__(f"{kind} not found: {entity_id}")
        self.kind = kind
        self.entity_id = entity_id


class TemplateLimitReachedError(RepLedgerError):
    """Creating another template needs an entitlement."""

    def __init__(self, current_count: int, limit: int):
        super().__init__(f"Template limit reached ({current_count}/{limit}); upgrade to create more")
        self.current_count = current_count
        self.limit = limit
