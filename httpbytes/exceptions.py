"""
Every failure that stops a decode or encode call is a `ConversionError`.

The concrete classes carry a fixed `code` so that callers which only look at
the error surface (e.g. code ported from the JavaScript client world) can
dispatch on it:

    INVALID_HTTP_FORMAT, UNSUPPORTED_METHOD, BODY_TOO_LARGE,
    INVALID_MULTIPART, INVALID_URL

Conversion errors subclass `ValueError`: malformed input is a value problem.
Programming errors (wrong option types, an attachment nobody can read) raise
`TypeError` instead.
"""


class ConversionError(ValueError):
    """
    Base class for all conversion errors.
    """

    code: str = "INVALID_HTTP_FORMAT"

    def __init__(self, message: str, details: str | None = None):
        super().__init__(message)
        self.message = message
        self.details = details

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} ({self.details})"
        return self.message


class InvalidHttpFormat(ConversionError):
    code = "INVALID_HTTP_FORMAT"


class InvalidRequestLine(InvalidHttpFormat):
    pass


class InvalidStatusLine(InvalidHttpFormat):
    pass


class UnsupportedMethod(ConversionError):
    code = "UNSUPPORTED_METHOD"


class BodyTooLarge(ConversionError):
    code = "BODY_TOO_LARGE"


class InvalidMultipart(ConversionError):
    code = "INVALID_MULTIPART"


class InvalidUrl(ConversionError):
    code = "INVALID_URL"
