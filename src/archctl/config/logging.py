"""structlog routing for archctl.

Every record, from structlog or plain ``logging``, ends up on one named
stderr handler on the root logger: stdout belongs to the MCP stdio
transport and to command output. ``--log-json`` switches the renderer
to JSON lines; ``--verbose`` lowers the ``archctl`` logger to DEBUG.
"""

from __future__ import annotations

import logging
import sys

import structlog
from structlog.types import Processor

HANDLER_NAME = "archctl-stderr"

# Chatty libraries capped regardless of --verbose.
_QUIET_LOGGERS: dict[str, int] = {
    "mcp": logging.WARNING,  # logs every request at INFO
    "anyio": logging.WARNING,
}


def _pre_chain() -> list[Processor]:
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]


def _renderer(log_json: bool) -> Processor:
    if log_json:
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())


def _stderr_handler(pre_chain: list[Processor], renderer: Processor) -> logging.Handler:
    handler = logging.StreamHandler(sys.stderr)
    handler.set_name(HANDLER_NAME)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=pre_chain,
            processors=[structlog.stdlib.ProcessorFormatter.remove_processors_meta, renderer],
        )
    )
    return handler


def configure_logging(*, verbose: bool = False, log_json: bool = False) -> None:
    """Route structlog and stdlib logging to stderr.

    Safe to call repeatedly: the previous archctl handler is replaced,
    handlers installed by others (e.g. pytest's caplog) are left alone.
    """
    pre_chain = _pre_chain()
    structlog.configure(
        processors=[*pre_chain, structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )

    root = logging.getLogger()
    for existing in [h for h in root.handlers if h.get_name() == HANDLER_NAME]:
        root.removeHandler(existing)
    root.addHandler(_stderr_handler(pre_chain, _renderer(log_json)))
    root.setLevel(logging.WARNING)

    logging.getLogger("archctl").setLevel(logging.DEBUG if verbose else logging.WARNING)
    for name, level in _QUIET_LOGGERS.items():
        logging.getLogger(name).setLevel(level)
