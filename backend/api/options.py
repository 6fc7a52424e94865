"""External options endpoint for Lark Approval forms."""

from litestar import Controller, MediaType, Request, Response, get, post, route
from litestar.enums import HttpMethod

from core.config import AppConfig
from core.errors import MethodNotAllowed, OptionsError
from core.fields import build_options
from core.lark import LarkClient
from core.logging import logger
from core.options import OptionsRequest
from core.responses import OptionsResult, make_envelope, success_envelope


HEALTH_MESSAGE = "Lark Base External Options API is running!"

ANY_PATH = ["/", "/{rest:path}"]

# Declaring OPTIONS here replaces the handler Litestar would add on its own.
OTHER_METHODS = [
    HttpMethod.PUT,
    HttpMethod.PATCH,
    HttpMethod.DELETE,
    HttpMethod.HEAD,
    HttpMethod.OPTIONS,
    HttpMethod.TRACE,
]


def handle_options_error(request: Request, exc: Exception) -> Response:
    """Map any exception raised while handling a request onto a response."""
    if not isinstance(exc, OptionsError) or exc.status_code >= 500:
        logger.error("Error handling request: %s", exc, exc_info=exc)

    if isinstance(exc, MethodNotAllowed):
        return Response(
            exc.message,
            status_code=exc.status_code,
            media_type=MediaType.TEXT,
        )

    error = exc if isinstance(exc, OptionsError) else OptionsError()
    return Response(
        make_envelope(1, error.message),
        status_code=error.status_code,
        media_type=MediaType.JSON,
    )


class OptionsController(Controller):
    path = "/"
    tags = ["options"]
    exception_handlers = {Exception: handle_options_error}

    @get(ANY_PATH, media_type=MediaType.TEXT)
    async def health_check(self) -> str:
        return HEALTH_MESSAGE

    @post(ANY_PATH, status_code=200)
    async def list_options(
        self,
        request: Request,
        config: AppConfig,
        lark: LarkClient,
    ) -> Response[dict]:
        """Return the distinct values of a Base field as approval options."""
        options_request = OptionsRequest.from_payload(await request.json())
        options_request.validate(config.auth_token)

        records = await lark.fetch_records(
            options_request.app_token,
            options_request.table_id,
            options_request.field_name,
        )
        result = OptionsResult(
            options=build_options(records, options_request.field_name)
        )

        return Response(success_envelope(result), media_type=MediaType.JSON)

    @route(
        ANY_PATH,
        http_method=OTHER_METHODS,
        status_code=405,
    )
    async def method_not_allowed(self) -> None:
        raise MethodNotAllowed()
