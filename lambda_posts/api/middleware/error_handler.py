"""Global exception handlers for the FastAPI application.

Every error that reaches the API boundary is answered with the failure
envelope ``{"success": false, "message": ...}``:

- ``LambdaPostsError`` subclasses use their own status code and message.
- ``RequestValidationError`` (a body that is not valid JSON) becomes 400.
- Starlette ``HTTPException`` (unknown route, wrong method) keeps its status.
- Anything else is logged with its traceback and becomes 500.
"""

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import Response
from loguru import logger
from starlette.exceptions import HTTPException

from lambda_posts.api.utils.responses import failure_response
from lambda_posts.core.context import RequestContext
from lambda_posts.core.exceptions import LambdaPostsError

INVALID_BODY_MESSAGE = "The request body must be valid JSON."
INTERNAL_ERROR_MESSAGE = "An internal server error occurred."


async def app_error_handler(request: Request, exc: Exception) -> Response:
    """Handle LambdaPostsError exceptions.

    Args:
        request: The request that caused the exception
        exc: The LambdaPostsError exception to handle

    Returns:
        Response: Failure envelope with the error's status code

    Raises:
        TypeError: If exc is not a LambdaPostsError instance
    """
    if not isinstance(exc, LambdaPostsError):
        raise TypeError(f"Expected LambdaPostsError, got {type(exc).__name__}")

    log = logger.bind(
        correlation_id=RequestContext.get_correlation_id(),
        error_code=exc.error_code,
        status_code=exc.status_code,
        request_method=request.method,
        request_path=request.url.path,
        **exc.context,
    )
    if exc.is_expected:
        log.info("Request rejected: {}", exc.message)
    else:
        log.opt(exception=exc.cause or exc).error(
            "Handling {}: {}", type(exc).__name__, exc.message
        )

    return failure_response(exc.status_code, exc.message)


async def validation_error_handler(request: Request, exc: Exception) -> Response:
    """Handle FastAPI RequestValidationError exceptions.

    Args:
        request: The request that caused the exception
        exc: The RequestValidationError exception to handle

    Returns:
        Response: 400 failure envelope

    Raises:
        TypeError: If exc is not a RequestValidationError instance
    """
    if not isinstance(exc, RequestValidationError):
        raise TypeError(f"Expected RequestValidationError, got {type(exc).__name__}")

    logger.info(
        "Request body could not be parsed",
        correlation_id=RequestContext.get_correlation_id(),
        request_method=request.method,
        request_path=request.url.path,
        errors=[error.get("type") for error in exc.errors()],
    )

    return failure_response(status.HTTP_400_BAD_REQUEST, INVALID_BODY_MESSAGE)


async def http_exception_handler(request: Request, exc: Exception) -> Response:
    """Handle Starlette HTTPException.

    Args:
        request: The request that caused the exception
        exc: The HTTPException to handle

    Returns:
        Response: Failure envelope with the exception's status code

    Raises:
        TypeError: If exc is not an HTTPException instance
    """
    if not isinstance(exc, HTTPException):
        raise TypeError(f"Expected HTTPException, got {type(exc).__name__}")

    logger.info(
        "HTTP exception",
        correlation_id=RequestContext.get_correlation_id(),
        status_code=exc.status_code,
        request_method=request.method,
        request_path=request.url.path,
    )

    response = failure_response(exc.status_code, str(exc.detail))
    if exc.headers:
        response.headers.update(exc.headers)
    return response


async def generic_exception_handler(request: Request, exc: Exception) -> Response:
    """Handle any exception no other handler claimed.

    Args:
        request: The request that caused the exception
        exc: The unhandled exception

    Returns:
        Response: 500 failure envelope without internal details
    """
    logger.opt(exception=exc).error(
        "Unhandled exception: {}",
        type(exc).__name__,
        correlation_id=RequestContext.get_correlation_id(),
        request_method=request.method,
        request_path=request.url.path,
    )

    return failure_response(
        status.HTTP_500_INTERNAL_SERVER_ERROR, INTERNAL_ERROR_MESSAGE
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Register all exception handlers with the FastAPI application.

    Args:
        app: The FastAPI application instance
    """
    app.add_exception_handler(LambdaPostsError, app_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(HTTPException, http_exception_handler)
    app.add_exception_handler(Exception, generic_exception_handler)

    logger.info("Exception handlers registered")
