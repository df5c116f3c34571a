"""Free vs. entitled feature limits."""

from repledger.core.config import Settings, get_settings
from repledger.core.constants import FREE_TEMPLATE_LIMIT


def can_create(current_count: int, is_entitled: bool, free_limit: int = FREE_TEMPLATE_LIMIT) -> bool:
    """Entitled users are unlimited; others may hold up to ``free_limit`` items.

    The count can change between this check and the write, so callers check
    again right before committing.
    """
    return is_entitled or current_count < free_limit


def can_create_template(current_count: int, is_entitled: bool, settings: Settings | None = None) -> bool:
    settings = settings or get_settings()
    return can_create(current_count, is_entitled, settings.free_template_limit)
