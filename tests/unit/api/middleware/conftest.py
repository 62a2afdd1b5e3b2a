"""Fixtures for API middleware tests."""

from typing import cast

import pytest
from fastapi import Request
from pytest_mock import MockerFixture, MockType
from starlette.datastructures import URL
from starlette.responses import Response as StarletteResponse

from lambda_posts.api.middleware.request_context import RequestContextMiddleware
from lambda_posts.api.middleware.request_logging import RequestLoggingMiddleware
from lambda_posts.core.config import LogConfig


@pytest.fixture
def mock_request(mocker: MockerFixture) -> MockType:
    """Create mock FastAPI Request with configurable attributes.

    Returns:
        MockType: Mock request object with standard HTTP request attributes.
    """
    request = mocker.Mock(spec=Request)
    request.method = "GET"
    request.url = mocker.Mock(spec=URL)
    request.url.path = "/api/users"
    request.headers = {"user-agent": "test-client/1.0"}
    request.client = mocker.Mock()
    request.client.host = "127.0.0.1"

    return cast("MockType", request)


@pytest.fixture
def mock_response() -> StarletteResponse:
    """Provide a plain response with mutable headers."""
    return StarletteResponse(content=b"{}", status_code=200)


@pytest.fixture
def mock_call_next(
    mocker: MockerFixture, mock_response: StarletteResponse
) -> MockType:
    """Provide a call_next returning ``mock_response``."""
    return cast(
        "MockType", mocker.AsyncMock(return_value=mock_response)
    )


@pytest.fixture
def request_context_middleware(mocker: MockerFixture) -> RequestContextMiddleware:
    """Provide a RequestContextMiddleware around a dummy app."""
    return RequestContextMiddleware(mocker.Mock())


@pytest.fixture
def log_config() -> LogConfig:
    """Provide a logging configuration with a low slow-request threshold."""
    return LogConfig(excluded_paths=["/health"], slow_request_threshold_ms=50)


@pytest.fixture
def request_logging_middleware(
    mocker: MockerFixture, log_config: LogConfig
) -> RequestLoggingMiddleware:
    """Provide a RequestLoggingMiddleware around a dummy app."""
    return RequestLoggingMiddleware(mocker.Mock(), log_config=log_config)
