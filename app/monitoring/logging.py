"""
Structured logging for the Viblog backend.

Every module logs through ``get_logger(__name__)``. Records from structlog
and from the standard library (uvicorn, SQLAlchemy) share one pipeline:

- ``LOG_FORMAT=console`` renders colored lines with rich tracebacks
- ``LOG_FORMAT=json`` renders one JSON object per line
- ``LOG_TO_FILE`` adds a rotating plain-text file next to the console

Anything that looks like a JWT, an email address or a bcrypt hash is
redacted before rendering, and control characters are escaped so that a
crafted comment or header cannot forge extra log lines. The request id
bound by the logging middleware is merged into every record.

Examples
--------
>>> from app.monitoring import get_logger
>>> logger = get_logger(__name__)
>>> logger.info("Post published", post_id=1)
"""

from logging import INFO, WARNING, StreamHandler, getLogger, root
from logging.handlers import RotatingFileHandler
from pathlib import Path
from re import Pattern
from re import compile as re_compile
from typing import Any

from structlog import configure
from structlog import get_logger as struct_logger
from structlog.contextvars import (
    bind_contextvars,
    clear_contextvars,
    get_contextvars,
    merge_contextvars,
)
from structlog.dev import ConsoleRenderer, RichTracebackFormatter
from structlog.processors import (
    JSONRenderer,
    StackInfoRenderer,
    TimeStamper,
    UnicodeDecoder,
    add_log_level,
    format_exc_info,
)
from structlog.stdlib import (
    BoundLogger,
    ExtraAdder,
    LoggerFactory,
    PositionalArgumentsFormatter,
    ProcessorFormatter,
    add_logger_name,
    filter_by_level,
)
from structlog.types import EventDict, Processor, WrappedLogger

from app.configs.settings import settings

SENSITIVE_HEADERS: frozenset[str] = frozenset(
    {
        "authorization",
        "cookie",
        "set-cookie",
        "x-comment-password",
    },
)

# JWTs contain dots and must be matched before emails
PII_PATTERNS: list[tuple[Pattern, str]] = [
    (re_compile(r"eyJ[a-zA-Z0-9_-]*\.eyJ[a-zA-Z0-9_-]*\.[a-zA-Z0-9_-]*"), "[REDACTED_JWT]"),
    (re_compile(r"[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}"), "[REDACTED_EMAIL]"),
    (re_compile(r"\$2[aby]?\$\d{2}\$[./A-Za-z0-9]{53}"), "[REDACTED_HASH]"),
]

CONTROL_CHARS = str.maketrans({"\n": "\\n", "\r": "\\r", "\t": "\\t", "\x00": ""})

# Third-party loggers that are too chatty at INFO
NOISY_LOGGERS = ("uvicorn.access", "passlib", "aiosqlite", "asyncio")

timestamper = TimeStamper(fmt="iso", utc=True)


def sanitize_log_message(message: str) -> str:
    r"""
    Escape control characters in a log message.

    Examples:
    --------
    >>> sanitize_log_message("Hello\nWorld")
    'Hello\\nWorld'
    """
    return message.translate(CONTROL_CHARS)


def sanitize_headers(headers: dict[str, Any]) -> dict[str, Any]:
    """
    Return headers with credential values redacted.

    Examples:
    --------
    >>> sanitize_headers({"Authorization": "Bearer abc", "Accept": "json"})
    {'Authorization': '[REDACTED]', 'Accept': 'json'}
    """
    return {k: "[REDACTED]" if k.lower() in SENSITIVE_HEADERS else v for k, v in headers.items()}


def redact_pii(message: str) -> str:
    """
    Redact tokens, email addresses and password hashes.

    Examples:
    --------
    >>> redact_pii("Login failed for reader@example.com")
    'Login failed for [REDACTED_EMAIL]'
    """
    for pattern, replacement in PII_PATTERNS:
        message = pattern.sub(replacement, message)
    return message


def add_app_context(
    logger: WrappedLogger,
    method_name: str,
    event_dict: EventDict,
) -> EventDict:
    """Tag JSON records with the environment so shipped logs can be filtered."""
    if settings.LOG_FORMAT == "json":
        event_dict.setdefault("env", settings.SERVER_ENV)
    return event_dict


def sanitize_event_dict(
    logger: WrappedLogger,
    method_name: str,
    event_dict: EventDict,
) -> EventDict:
    """Apply control character escaping and PII redaction to every string field."""
    for key, value in event_dict.items():
        if isinstance(value, str):
            event_dict[key] = redact_pii(sanitize_log_message(value))
        elif key.lower() == "headers" and isinstance(value, dict):
            event_dict[key] = sanitize_headers(value)

    return event_dict


def get_renderer(*, colors: bool = True) -> Processor:
    """Return the final renderer for the configured ``LOG_FORMAT``."""
    if settings.LOG_FORMAT == "console":
        return ConsoleRenderer(
            colors=colors,
            pad_level=False,
            exception_formatter=RichTracebackFormatter(),
        )
    return JSONRenderer()


def _formatter(*, colors: bool) -> ProcessorFormatter:
    processors: list[Processor] = [
        ProcessorFormatter.remove_processors_meta,
        ExtraAdder(),
        add_app_context,
        sanitize_event_dict,
    ]
    if settings.LOG_FORMAT == "json":
        processors.append(format_exc_info)
    processors.append(get_renderer(colors=colors))

    return ProcessorFormatter(
        processors=processors,
        foreign_pre_chain=[
            merge_contextvars,
            add_log_level,
            timestamper,
        ],
    )


def configure_logging() -> None:
    """Configure structlog and the root logger. Safe to call more than once."""
    root.handlers.clear()
    root.setLevel(settings.LOG_LEVEL.upper())

    configure(
        processors=[
            filter_by_level,
            merge_contextvars,
            add_logger_name,
            add_log_level,
            timestamper,
            PositionalArgumentsFormatter(),
            StackInfoRenderer(),
            UnicodeDecoder(),
            ProcessorFormatter.wrap_for_formatter,
        ],
        context_class=dict,
        logger_factory=LoggerFactory(),
        wrapper_class=BoundLogger,
        cache_logger_on_first_use=True,
    )

    console_handler = StreamHandler()
    console_handler.setFormatter(_formatter(colors=not settings.is_production))
    root.addHandler(console_handler)
    configure_file_logging()

    for name in NOISY_LOGGERS:
        getLogger(name).setLevel(WARNING)
    getLogger("sqlalchemy.engine").setLevel(INFO if settings.DATABASE_ECHO else WARNING)


def configure_file_logging() -> None:
    """Attach a rotating file handler when ``LOG_TO_FILE`` is set."""
    if not settings.LOG_TO_FILE:
        return

    log_file = Path(settings.LOG_FILE)
    log_file.parent.mkdir(parents=True, exist_ok=True)
    file_handler = RotatingFileHandler(
        log_file,
        maxBytes=5 * 1024 * 1024,
        backupCount=5,
        encoding="utf-8",
    )
    file_handler.setLevel(INFO)
    file_handler.setFormatter(_formatter(colors=False))
    root.addHandler(file_handler)


def get_logger(name: str) -> BoundLogger:
    """Return a structlog logger named after the calling module."""
    return struct_logger(name)


def bind_request_id(request_id: str) -> None:
    bind_contextvars(request_id=request_id)


def get_request_id() -> str | None:
    """Return the request id bound to the current context, if any."""
    return get_contextvars().get("request_id")


def clear_context() -> None:
    clear_contextvars()
