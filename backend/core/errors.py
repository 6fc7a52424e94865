"""Error kinds raised while answering an options request.

Each kind carries the HTTP status and the message placed in the response
envelope. Anything that is not a client error is reported as a generic
internal error; the detail only reaches the server log.
"""

INTERNAL_ERROR_MESSAGE = "Internal server error. Check worker logs."


class OptionsError(Exception):
    """Base class for errors that map onto the response envelope."""

    status_code: int = 500
    message: str = INTERNAL_ERROR_MESSAGE


class InvalidSecret(OptionsError):
    status_code = 401
    message = "Invalid token."


class MissingParameter(OptionsError):
    status_code = 400
    message = "Missing required parameters: app_token, table_id, or field_name."


class MethodNotAllowed(OptionsError):
    status_code = 405
    message = "Method not allowed"


class MalformedRequestBody(OptionsError):
    """The request body is not a JSON object."""


class UpstreamAuthError(OptionsError):
    """The app access token exchange failed."""


class UpstreamFetchError(OptionsError):
    """Reading records from the Base table failed in transport."""
