"""structlog setup and request-scoped log context.

Application code logs through structlog; records emitted by libraries on
the standard ``logging`` module (uvicorn, SQLAlchemy, httpx) are routed
through the same processor chain so a deployment sees one format.
"""

import logging
import sys
from typing import TYPE_CHECKING
from uuid import UUID

import structlog
from structlog.contextvars import bind_contextvars, clear_contextvars

if TYPE_CHECKING:
    from src.lamyda.core.config import Settings

QUIET_LOGGERS = {
    "sqlalchemy.engine": logging.WARNING,
    "httpx": logging.WARNING,
    "httpcore": logging.WARNING,
    "uvicorn.access": logging.WARNING,
}


def _renderer(json_logs: bool) -> structlog.typing.Processor:
    if json_logs:
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer(colors=sys.stdout.isatty())


def setup_logging(settings: "Settings") -> None:
    """Configure structlog and the stdlib root logger from settings.

    JSON lines are written unless ``settings.debug`` is set, in which case
    output is the human-readable console renderer.
    """
    json_logs = not settings.debug
    level = logging.DEBUG if settings.debug else logging.getLevelName(settings.log_level)

    shared_processors: list[structlog.typing.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]
    if json_logs:
        shared_processors.append(structlog.processors.format_exc_info)

    structlog.configure(
        processors=[*shared_processors, structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=shared_processors,
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                _renderer(json_logs),
            ],
        )
    )
    root = logging.getLogger()
    root.handlers = [handler]
    root.setLevel(level)

    for name, quiet_level in QUIET_LOGGERS.items():
        logging.getLogger(name).setLevel(quiet_level)


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """Get a structlog logger instance.

    Args:
        name: Optional logger name.

    Returns:
        A bound structlog logger.
    """
    return structlog.get_logger(name)


def bind_request_context(
    request_id: str | None, method: str | None = None, path: str | None = None
) -> None:
    """Bind request-level context to all subsequent log calls.

    Args:
        request_id: The correlation ID for the current request.
        method: HTTP method, bound when given.
        path: Request path, bound when given.
    """
    values = {"request_id": request_id, "method": method, "path": path}
    bind_contextvars(**{key: value for key, value in values.items() if value})


def bind_actor_context(user_id: UUID, company_id: UUID) -> None:
    """Bind the acting user and owning company to all subsequent log calls.

    The user id is only bound when settings.log_user_ids is True.
    """
    from src.lamyda.core.config import get_settings

    bind_contextvars(company_id=str(company_id))
    if get_settings().log_user_ids:
        bind_contextvars(user_id=str(user_id))


def clear_request_context() -> None:
    """Clear all request-scoped context."""
    clear_contextvars()
