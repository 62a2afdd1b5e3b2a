"""Unit tests for the uvicorn entry point."""

import pytest
from pytest_mock import MockerFixture, MockType

import main
from lambda_posts.core.config import Settings


@pytest.fixture
def mock_uvicorn(mocker: MockerFixture) -> MockType:
    """Replace uvicorn.run so no server is started."""
    return mocker.patch("main.uvicorn.run")


@pytest.fixture
def patched_main(mocker: MockerFixture, mock_settings: Settings) -> dict[str, MockType]:
    """Patch settings, logging setup and the logger used by main()."""
    return {
        "get_settings": mocker.patch("main.get_settings", return_value=mock_settings),
        "setup_logging": mocker.patch("main.setup_logging"),
        "logger": mocker.patch("main.logger"),
    }


@pytest.mark.unit
class TestMain:
    """Test main() and its uvicorn configuration."""

    def test_loads_settings_and_sets_up_logging(
        self,
        patched_main: dict[str, MockType],
        mock_uvicorn: MockType,
        mock_settings: Settings,
    ) -> None:
        main.main()

        patched_main["get_settings"].assert_called_once()
        patched_main["setup_logging"].assert_called_once_with(mock_settings)
        mock_uvicorn.assert_called_once()

    @pytest.mark.parametrize(
        ("env_port", "expected_port"),
        [("8080", 8080), (None, 3000)],
    )
    def test_port_precedence(
        self,
        patched_main: dict[str, MockType],
        mock_uvicorn: MockType,
        monkeypatch: pytest.MonkeyPatch,
        env_port: str | None,
        expected_port: int,
    ) -> None:
        if env_port is not None:
            monkeypatch.setenv("PORT", env_port)

        main.main()

        assert mock_uvicorn.call_args.kwargs["port"] == expected_port

    def test_production_mode_runs_app_object(
        self,
        patched_main: dict[str, MockType],
        mock_uvicorn: MockType,
        mock_settings: Settings,
    ) -> None:
        main.main()

        args, kwargs = mock_uvicorn.call_args
        assert args[0] is main.app
        assert kwargs["reload"] is False
        assert kwargs["host"] == mock_settings.api_host
        assert "production mode" in patched_main["logger"].info.call_args.args[0]

    def test_debug_mode_reloads_import_string(
        self,
        mocker: MockerFixture,
        mock_uvicorn: MockType,
        mock_settings: Settings,
    ) -> None:
        debug_settings = mock_settings.model_copy(update={"debug": True})
        mocker.patch("main.get_settings", return_value=debug_settings)
        mocker.patch("main.setup_logging")
        mock_logger = mocker.patch("main.logger")

        main.main()

        args, kwargs = mock_uvicorn.call_args
        assert args[0] == "lambda_posts.api.main:app"
        assert kwargs["reload"] is True
        assert "auto-reload" in mock_logger.info.call_args.args[0]

    def test_uvicorn_logs_through_loguru(
        self, patched_main: dict[str, MockType], mock_uvicorn: MockType
    ) -> None:
        main.main()

        log_config = mock_uvicorn.call_args.kwargs["log_config"]
        assert log_config is main.UVICORN_LOG_CONFIG
        assert (
            log_config["handlers"]["default"]["class"]
            == "lambda_posts.core.logging.InterceptHandler"
        )
        for name in ("uvicorn", "uvicorn.error", "uvicorn.access"):
            assert log_config["loggers"][name]["handlers"] == ["default"]
            assert log_config["loggers"][name]["propagate"] is False
