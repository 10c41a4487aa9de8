"""Tests for ApplicationContext wiring and the main window."""

import httpx
import pytest
from PySide6.QtGui import QCloseEvent

from playledger.app import ApplicationContext
from playledger.domain.settings import AppSettings
from playledger.services.outcome import OutcomeKind
from playledger.state.persistence import SettingsStore
from playledger.ui.main_window import MainWindow

BASE_URL = "http://lounge.test/api"


class TestApplicationContext:
    """Tests for ApplicationContext."""

    @pytest.mark.asyncio
    async def test_initialize_loads_collections(self, context, backend):
        backend.add_transaction(transactionId=1)

        outcome = await context.initialize()

        assert outcome.kind == OutcomeKind.LOADED
        assert len(context.cache.transactions) == 1
        assert context.state.last_outcome.value is outcome

    @pytest.mark.asyncio
    async def test_initialize_against_unreachable_backend(self, context, backend):
        backend.fail("GET", "/transactions", exc=httpx.ConnectError("connection refused"))

        outcome = await context.initialize()

        assert outcome.kind == OutcomeKind.FAILED
        assert outcome.message == "Error loading transactions: connection refused"
        assert context.cache.transactions == []
        assert context.cache.is_loading is False

    @pytest.mark.asyncio
    async def test_base_url_from_settings(self, tmp_path):
        store = SettingsStore(tmp_path / "settings.json")
        settings = AppSettings()
        settings.api.base_url = "http://saved.test/api"
        store.save(settings)

        ctx = ApplicationContext(store)
        try:
            assert ctx.client.base_url == "http://saved.test/api"
        finally:
            await ctx.close()

    def test_base_url_override_is_not_saved(self, qtbot, context):
        """The command-line URL is used for this run only."""
        assert context.base_url == BASE_URL
        assert context.client.base_url == BASE_URL
        assert context.settings.api.base_url == "http://localhost:8080/api"

        window = MainWindow(context)
        qtbot.addWidget(window)
        window.closeEvent(QCloseEvent())

        saved = context.settings_store.load()
        assert saved.api.base_url == "http://localhost:8080/api"


class TestMainWindow:
    """Tests for MainWindow."""

    @pytest.mark.asyncio
    async def test_title_and_status(self, qtbot, context, backend):
        backend.add_transaction(transactionId=1)
        backend.add_transaction(transactionId=2)
        window = MainWindow(context)
        qtbot.addWidget(window)

        await context.initialize()

        assert window.windowTitle() == f"Playledger - {BASE_URL}"
        assert window.status_bar.currentMessage() == "2 transactions"

    def test_close_saves_window_size(self, qtbot, context):
        window = MainWindow(context)
        qtbot.addWidget(window)
        window.resize(900, 600)

        window.closeEvent(QCloseEvent())

        saved = context.settings_store.load()
        assert saved.ui_state.window_width == 900
        assert saved.ui_state.window_height == 600
