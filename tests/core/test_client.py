import pytest

from pyorbit import (
    AsyncQueryExecutor,
    NotConfigured,
    configure,
    get_executor,
    register_executor,
    unregister_executor,
)


async def fetch(query):
    return {"data": {}}


class TestConfigure:
    def test_configure_registers_default(self):
        executor = configure(fetch)
        assert isinstance(executor, AsyncQueryExecutor)
        assert get_executor() is executor

    def test_configure_with_timeout(self):
        executor = configure(fetch, timeout=2.5)
        assert executor.timeout == 2.5

    def test_multiple_aliases(self):
        default = configure(fetch)
        secondary = configure(fetch, alias="secondary")
        assert get_executor("secondary") is secondary
        assert get_executor("default") is default

    def test_register_custom_executor(self, executor):
        register_executor(executor, alias="manual")
        assert get_executor("manual") is executor

    def test_register_replaces_existing(self, executor):
        configure(fetch)
        register_executor(executor)
        assert get_executor() is executor


class TestGetExecutor:
    def test_not_configured_raises(self):
        with pytest.raises(NotConfigured, match="configure"):
            get_executor()

    def test_unregister_removes_executor(self):
        configure(fetch)
        unregister_executor()
        with pytest.raises(NotConfigured):
            get_executor()

    def test_unregister_unknown_alias_is_ignored(self):
        unregister_executor("nope")
