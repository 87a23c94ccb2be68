"""Tests for application startup and shutdown."""

import pytest
from sqlalchemy import inspect
from sqlalchemy.ext.asyncio import create_async_engine

from quote_intake import main
from quote_intake.main import app


async def table_names(engine):
    async with engine.connect() as conn:
        return await conn.run_sync(lambda sync_conn: inspect(sync_conn).get_table_names())


@pytest.mark.integration
@pytest.mark.asyncio
class TestLifespan:

    async def test_creates_quotes_table(self, monkeypatch, tmp_path):
        engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'quotes.db'}")
        monkeypatch.setattr(main, "engine", engine)

        async with app.router.lifespan_context(app):
            assert "quotes" in await table_names(engine)

    async def test_table_creation_failure_does_not_block_startup(self, monkeypatch, tmp_path):
        # Parent directory does not exist, so SQLite cannot open the file
        engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'missing' / 'quotes.db'}")
        monkeypatch.setattr(main, "engine", engine)
        started = False

        async with app.router.lifespan_context(app):
            started = True

        assert started

    async def test_no_database_configured(self, monkeypatch):
        monkeypatch.setattr(main, "engine", None)

        async with app.router.lifespan_context(app):
            pass
