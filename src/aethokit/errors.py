"""Typed failures raised by the aethokit client."""

from __future__ import annotations

from typing import Optional


class AethokitError(Exception):
    """Base error for the aethokit SDK."""


# ---- Construction ----


class ConfigError(AethokitError):
    """Raised while resolving client configuration, never during a call."""


class EmptyCredential(ConfigError):
    def __init__(self) -> None:
        super().__init__("GAS KEY is required to initialize the SDK")


class InvalidCredential(ConfigError):
    """The GAS KEY cannot be carried in an HTTP header."""

    def __init__(self, reason: str) -> None:
        self.reason = reason
        super().__init__(f"invalid GAS KEY: {reason}")


class InvalidEndpoint(ConfigError):
    def __init__(self, endpoint: str, reason: str) -> None:
        self.endpoint = endpoint
        self.reason = reason
        super().__init__(f"invalid relay endpoint {endpoint!r}: {reason}")


# ---- Calls ----


class ApiError(AethokitError):
    """A call to the relay did not produce a result."""


class TransportFailure(ApiError):
    """Connection, DNS or TLS failure, or a non-2xx reply without a decodable error body."""

    def __init__(
        self,
        message: str,
        http_status: Optional[int] = None,
        body: Optional[str] = None,
        cause: Optional[BaseException] = None,
    ) -> None:
        self.message = message
        self.http_status = http_status
        self.body = body
        self.cause = cause
        super().__init__(message)

    def __str__(self) -> str:
        suffix = []
        if self.http_status is not None:
            suffix.append(f"status={self.http_status}")
        if self.body:
            suffix.append(f"body={self.body}")
        if self.cause:
            suffix.append(f"cause={self.cause!r}")
        detail = ", ".join(suffix)
        return f"{self.message} ({detail})" if detail else self.message


class Timeout(ApiError):
    def __init__(self, message: str, cause: Optional[BaseException] = None) -> None:
        self.cause = cause
        super().__init__(message)


class Cancelled(ApiError):
    """The exchange was cancelled underneath the call.

    Cancelling the calling task itself is not reported this way: the task's
    own ``asyncio.CancelledError`` propagates unchanged.
    """


class HttpStatus(ApiError):
    """The relay answered with a non-success status and a structured error body."""

    def __init__(self, status: int, code: str, server_message: str) -> None:
        self.status = status
        self.code = code
        self.server_message = server_message
        super().__init__(f"relay API error {status} {code}: {server_message}")


class MalformedResponse(ApiError):
    """A 2xx body that does not match the expected shape."""

    def __init__(self, field: Optional[str], detail: str, body: Optional[str] = None) -> None:
        self.field = field
        self.detail = detail
        self.body = body
        where = f" (field {field!r})" if field else ""
        super().__init__(f"malformed relay response{where}: {detail}")


class EmptyInput(ApiError):
    def __init__(self, argument: str) -> None:
        self.argument = argument
        super().__init__(f"{argument} must not be empty")
