from enum import StrEnum


class ApiErrorKind(StrEnum):
    REQUEST_CONSTRUCTION_FAILED = "REQUEST_CONSTRUCTION_FAILED"
    TRANSPORT_FAILED = "TRANSPORT_FAILED"
    UNAUTHORIZED = "UNAUTHORIZED"
    CLIENT_ERROR = "CLIENT_ERROR"
    SERVER_ERROR = "SERVER_ERROR"
    UNEXPECTED_RESPONSE = "UNEXPECTED_RESPONSE"
    DESERIALIZATION_FAILED = "DESERIALIZATION_FAILED"


class ApiError(Exception):
    """Base class for every failure raised by the client.

    The set of subclasses is closed: each one carries a distinct ``kind`` so
    callers can either catch the subclass or ``match error.kind``.
    """

    kind: ApiErrorKind


class RequestConstructionError(ApiError):
    """A request could not be built (missing or invalid field, reused request)."""

    kind = ApiErrorKind.REQUEST_CONSTRUCTION_FAILED

    def __init__(self, message: str):
        super().__init__(f"Error building the request: {message}")
        self.message = message


class TransportError(ApiError):
    """The request never produced an HTTP response (DNS, TLS, timeout, reset...)."""

    kind = ApiErrorKind.TRANSPORT_FAILED

    def __init__(self, message: str):
        super().__init__(f"Error sending the request: {message}")
        self.message = message


class UnauthorizedError(ApiError):
    """The server answered 401 or 403."""

    kind = ApiErrorKind.UNAUTHORIZED

    def __init__(self, status_code: int = 401):
        super().__init__(f"Authentication error ({status_code})")
        self.status_code = status_code


class HttpStatusError(ApiError):
    def __init__(self, status_code: int, body: str, message: str | None = None):
        super().__init__(message or f"HTTP {status_code}: {body}")
        self.status_code = status_code
        self.body = body


class HttpClientError(HttpStatusError):
    """4xx other than 401/403."""

    kind = ApiErrorKind.CLIENT_ERROR


class HttpServerError(HttpStatusError):
    """5xx."""

    kind = ApiErrorKind.SERVER_ERROR


class UnexpectedResponseError(HttpStatusError):
    """Any status that is neither success nor 4xx/5xx, e.g. an unfollowed redirect."""

    kind = ApiErrorKind.UNEXPECTED_RESPONSE

    def __init__(self, status_code: int, body: str):
        super().__init__(status_code, body, f"Unexpected Response [{status_code}]: {body}")


class DeserializationError(ApiError):
    """A 2xx body did not match the expected model."""

    kind = ApiErrorKind.DESERIALIZATION_FAILED

    def __init__(self, detail: str):
        super().__init__(f"Error deserializing the response: {detail}")
        self.detail = detail
