"""Response envelope shared by every API endpoint."""

from datetime import UTC, datetime

from fastapi.responses import JSONResponse

from protocol_tracker.errors import ProtocolTrackerError


def _timestamp() -> str:
    return datetime.now(tz=UTC).isoformat()


def success(data: object = None, message: str | None = None) -> dict[str, object]:
    """Wrap a payload in the success envelope."""
    body: dict[str, object] = {"success": True, "data": data}
    if message is not None:
        body["message"] = message
    body["timestamp"] = _timestamp()
    return body


def failure(status_code: int, error: str, error_type: str) -> JSONResponse:
    """Return an error envelope with the given status."""
    return JSONResponse(
        status_code=status_code,
        content={
            "success": False,
            "error": error,
            "error_type": error_type,
            "timestamp": _timestamp(),
        },
    )


def from_error(exc: ProtocolTrackerError) -> JSONResponse:
    """Render an application error."""
    return failure(int(exc.status_code), exc.message, exc.error_type)
