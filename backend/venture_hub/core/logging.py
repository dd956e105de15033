"""structlog setup shared by the API process and its third-party libraries.

Every entry carries the request id, the signed-in user (once ``require_auth``
has run) and the deployment environment. Production renders JSON; debug mode
renders for the console.
"""

import logging
import logging.config

import structlog
from asgi_correlation_id.context import correlation_id

# Third-party loggers that are too chatty at INFO
QUIET_LOGGERS = ("uvicorn.access", "httpx", "httpcore", "openai")


def add_request_id(logger, method, event_dict):
    request_id = correlation_id.get(None)
    if request_id:
        event_dict.setdefault("correlation_id", request_id)
    return event_dict


def add_environment(environment: str):
    def processor(logger, method, event_dict):
        event_dict.setdefault("environment", environment)
        return event_dict

    return processor


def bind_user(user_id: str) -> None:
    """Attach the user id to every later log entry in this request's context."""
    structlog.contextvars.bind_contextvars(user_id=user_id)


def configure_structlog(log_level: str = "INFO", json_logs: bool = True, environment: str = "production") -> None:
    """Route structlog and stdlib logging through one formatter.

    Must run before modules call ``structlog.get_logger``: loggers are cached
    on first use.
    """
    pre_chain = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        add_request_id,
        add_environment(environment),
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.StackInfoRenderer(),
    ]
    renderer = structlog.processors.JSONRenderer() if json_logs else structlog.dev.ConsoleRenderer()
    if json_logs:
        pre_chain.append(structlog.processors.format_exc_info)

    logging.config.dictConfig({
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "venture_hub": {
                "()": structlog.stdlib.ProcessorFormatter,
                "foreign_pre_chain": pre_chain,
                "processors": [structlog.stdlib.ProcessorFormatter.remove_processors_meta, renderer],
            },
        },
        "handlers": {
            "stdout": {
                "class": "logging.StreamHandler",
                "stream": "ext://sys.stdout",
                "formatter": "venture_hub",
            },
        },
        "root": {"level": log_level, "handlers": ["stdout"]},
        "loggers": {name: {"level": "WARNING"} for name in QUIET_LOGGERS},
    })

    structlog.configure(
        processors=[*pre_chain, structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )
