"""Unit tests for engine and session management."""

import pytest
from pytest_mock import MockerFixture
from sqlalchemy.exc import OperationalError

from lambda_posts.infrastructure.database import session as session_module
from lambda_posts.infrastructure.database.models import Post, User
from lambda_posts.infrastructure.database.session import (
    COMMAND_TIMEOUT_SECONDS,
    POOL_RECYCLE_SECONDS,
    check_database_connection,
    close_database,
    create_database_engine,
    create_tables,
    get_async_session,
    get_engine,
    get_session_factory,
)


@pytest.mark.unit
class TestCreateDatabaseEngine:
    """Test engine creation."""

    def test_uses_configured_pool(self, mocker: MockerFixture) -> None:
        mock_create = mocker.patch(
            "lambda_posts.infrastructure.database.session.create_async_engine"
        )

        create_database_engine()

        args, kwargs = mock_create.call_args
        assert args[0].startswith("postgresql+asyncpg://")
        assert kwargs["pool_size"] == 10
        assert kwargs["pool_recycle"] == POOL_RECYCLE_SECONDS
        assert kwargs["connect_args"] == {"command_timeout": COMMAND_TIMEOUT_SECONDS}

    def test_explicit_url_wins(self, mocker: MockerFixture) -> None:
        mock_create = mocker.patch(
            "lambda_posts.infrastructure.database.session.create_async_engine"
        )

        create_database_engine("postgresql+asyncpg://other/db")

        assert mock_create.call_args.args[0] == "postgresql+asyncpg://other/db"


@pytest.mark.unit
@pytest.mark.usefixtures("reset_db_manager")
class TestDatabaseManager:
    """Test the process-wide engine singleton."""

    def test_engine_is_created_once(self, mocker: MockerFixture) -> None:
        mock_create = mocker.patch(
            "lambda_posts.infrastructure.database.session.create_database_engine"
        )

        first = get_engine()
        second = get_engine()

        assert first is second
        mock_create.assert_called_once()

    def test_session_factory_is_created_once(self, mocker: MockerFixture) -> None:
        mocker.patch(
            "lambda_posts.infrastructure.database.session.create_database_engine"
        )
        mock_maker = mocker.patch(
            "lambda_posts.infrastructure.database.session.async_sessionmaker"
        )

        assert get_session_factory() is get_session_factory()
        assert mock_maker.call_args.kwargs["expire_on_commit"] is False
        mock_maker.assert_called_once()

    async def test_close_disposes_engine(self, mocker: MockerFixture) -> None:
        engine = mocker.AsyncMock()
        mocker.patch(
            "lambda_posts.infrastructure.database.session.create_database_engine",
            return_value=engine,
        )
        get_engine()

        await close_database()

        engine.dispose.assert_awaited_once()
        assert session_module._db_manager._engine is None

    async def test_close_without_engine_is_noop(self) -> None:
        await close_database()

        assert session_module._db_manager._engine is None


@pytest.mark.unit
class TestGetAsyncSession:
    """Test commit and rollback behaviour."""

    @pytest.fixture
    def mock_session(self, mocker: MockerFixture) -> object:
        session = mocker.AsyncMock()
        factory = mocker.MagicMock()
        factory.return_value.__aenter__.return_value = session
        mocker.patch(
            "lambda_posts.infrastructure.database.session.get_session_factory",
            return_value=factory,
        )
        return session

    async def test_commits_on_success(self, mock_session: object) -> None:
        async with get_async_session() as session:
            assert session is mock_session

        mock_session.commit.assert_awaited_once()  # type: ignore[attr-defined]
        mock_session.rollback.assert_not_called()  # type: ignore[attr-defined]

    async def test_rolls_back_on_error(self, mock_session: object) -> None:
        with pytest.raises(ValueError, match="boom"):
            async with get_async_session():
                raise ValueError("boom")

        mock_session.rollback.assert_awaited_once()  # type: ignore[attr-defined]
        mock_session.commit.assert_not_called()  # type: ignore[attr-defined]


@pytest.mark.unit
class TestDatabaseChecks:
    """Test connectivity checks and table creation."""

    async def test_check_connection_success(self, mocker: MockerFixture) -> None:
        engine = mocker.MagicMock()
        conn = mocker.AsyncMock()
        conn.execute.return_value = mocker.MagicMock()
        engine.connect.return_value.__aenter__.return_value = conn
        mocker.patch(
            "lambda_posts.infrastructure.database.session.get_engine",
            return_value=engine,
        )

        assert await check_database_connection() == (True, None)
        conn.execute.assert_awaited_once()

    async def test_check_connection_failure(self, mocker: MockerFixture) -> None:
        engine = mocker.MagicMock()
        engine.connect.side_effect = OperationalError(
            "SELECT 1", {}, Exception("refused")
        )
        mocker.patch(
            "lambda_posts.infrastructure.database.session.get_engine",
            return_value=engine,
        )

        healthy, message = await check_database_connection()

        assert healthy is False
        assert message is not None
        assert "refused" in message

    async def test_check_connection_os_error(self, mocker: MockerFixture) -> None:
        mocker.patch(
            "lambda_posts.infrastructure.database.session.get_engine",
            side_effect=OSError("no route to host"),
        )

        assert await check_database_connection() == (False, "no route to host")

    async def test_create_tables(self, mocker: MockerFixture) -> None:
        engine = mocker.MagicMock()
        conn = mocker.AsyncMock()
        engine.begin.return_value.__aenter__.return_value = conn
        mocker.patch(
            "lambda_posts.infrastructure.database.session.get_engine",
            return_value=engine,
        )

        await create_tables()

        conn.run_sync.assert_awaited_once()
        assert conn.run_sync.call_args.kwargs["tables"] == [
            User.__table__,
            Post.__table__,
        ]
