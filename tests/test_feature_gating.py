"""Tests for the free-tier template limit."""

import pytest

from repledger.core.config import Settings
from repledger.services.feature_gating import can_create, can_create_template


class TestCanCreate:
    @pytest.mark.parametrize(
        "count,entitled,expected",
        [
            (0, False, True),
            (2, False, True),
            (3, False, False),
            (10, False, False),
            (3, True, True),
            (100, True, True),
        ],
    )
    def test_free_limit(self, count, entitled, expected):
        assert can_create(count, entitled) is expected

    def test_custom_limit(self):
        assert can_create(4, False, free_limit=5)
        assert not can_create(5, False, free_limit=5)

    def test_template_limit_comes_from_settings(self):
        settings = Settings(free_template_limit=1)
        assert can_create_template(0, False, settings)
        assert not can_create_template(1, False, settings)
        assert can_create_template(1, True, settings)
