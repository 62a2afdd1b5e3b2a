"""JSON responses rendered with orjson, and the failure envelope helper.

``ORJSONResponse`` is the default response class of the application, so
every envelope (success or failure) is serialized the same way.
"""

from typing import Any

import orjson
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from lambda_posts.api.schemas.envelopes import ErrorEnvelope

ERROR_DESCRIPTIONS = {
    400: "The request body is invalid.",
    404: "No entity exists for the id in the path.",
    500: "Internal Server Error.",
}


class ORJSONResponse(JSONResponse):
    """FastAPI response class using orjson for JSON serialization.

    Attributes:
        media_type: The media type for the response.
    """

    media_type = "application/json"

    def render(self, content: Any) -> bytes:  # noqa: ANN401 - accepts any JSON-serializable content
        """Render the content as JSON using orjson.

        Args:
            content: The content to serialize to JSON.

        Returns:
            bytes: The JSON-encoded bytes.
        """
        if isinstance(content, BaseModel):
            content = content.model_dump(mode="json")

        return orjson.dumps(content, option=orjson.OPT_SORT_KEYS)


def failure_response(status_code: int, message: str) -> ORJSONResponse:
    """Build a ``{"success": false, "message": ...}`` response.

    Args:
        status_code: HTTP status code of the response.
        message: Human-readable reason for the failure.

    Returns:
        ORJSONResponse: The failure envelope.
    """
    return ORJSONResponse(
        status_code=status_code,
        content=ErrorEnvelope(message=message).model_dump(mode="json"),
    )


def error_responses(*status_codes: int) -> dict[int | str, dict[str, Any]]:
    """OpenAPI ``responses`` entries documenting failure envelopes.

    Args:
        *status_codes: Failure status codes a route can answer with.

    Returns:
        dict[int | str, dict[str, Any]]: Mapping usable as ``responses=``.
    """
    return {
        code: {"model": ErrorEnvelope, "description": ERROR_DESCRIPTIONS[code]}
        for code in status_codes
    }
