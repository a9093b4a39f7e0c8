"""Unit tests for the configuration context."""

import asyncio

import pytest

from src.lending.core.services.catalog import CategoryTable
from src.lending.runtime.config.config_data import (
    CatalogConfig,
    CategoryConfig,
    ConfigData,
)
from src.lending.runtime.context import (
    AppContext,
    get_config,
    get_context,
    with_context,
)


class TestContextManager:
    def test_default_context_available(self):
        context = get_context()
        config = get_config()

        assert isinstance(context, AppContext)
        assert isinstance(config, ConfigData)
        assert context.config is config

    def test_with_context_override_single_field(self):
        original = get_config()
        override = ConfigData(catalog=CatalogConfig(loan_period_days=7))

        with with_context(override):
            assert get_config().catalog.loan_period_days == 7
            assert get_config().database.url == original.database.url

        assert get_config() is original

    def test_nested_overrides(self):
        original_level = get_config().logging.level
        level1 = ConfigData()
        level1.app.port = 8001

        with with_context(level1):
            level2 = ConfigData()
            level2.logging.level = "DEBUG"

            with with_context(level2):
                assert get_config().app.port == 8001
                assert get_config().logging.level == "DEBUG"

            assert get_config().logging.level == original_level
            assert get_config().app.port == 8001

        assert get_config().app.port != 8001

    def test_none_override_is_noop(self):
        original = get_config()

        with with_context(None):
            assert get_config() is original

    def test_rejects_other_types(self):
        with pytest.raises(ValueError, match="config_override must be ConfigData"):
            with with_context({"app": {}}):
                pass

    def test_category_table_follows_context(self):
        override = ConfigData(
            catalog=CatalogConfig(categories=[CategoryConfig(name="Novels", prefix="NV")])
        )

        with with_context(override):
            table = CategoryTable.from_config()

        assert len(table) == 1
        assert table.prefix_for(1) == "NV"

    @pytest.mark.asyncio
    async def test_overrides_are_isolated_between_tasks(self):
        async def loan_period(days: int) -> int:
            with with_context(ConfigData(catalog=CatalogConfig(loan_period_days=days))):
                await asyncio.sleep(0)
                return get_config().catalog.loan_period_days

        results = await asyncio.gather(loan_period(3), loan_period(21))

        assert results == [3, 21]
        assert get_config().catalog.loan_period_days == 14
