"""Route the package's stdlib logging through structlog.

Modules keep using ``logging.getLogger(__name__)``; ``setup_logging`` only
decides how records are rendered: JSON lines for log shippers, colored
console output for a developer terminal.
"""

from __future__ import annotations

import logging
import sys
from typing import TYPE_CHECKING, Any

import structlog

if TYPE_CHECKING:
    from symptom_dialogue.core.config import ObservabilityConfig

_QUIET_LOGGERS = ("LiteLLM", "LiteLLM Router", "LiteLLM Proxy", "httpx")


def _pre_chain() -> list[Any]:
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
    ]


def _render_chain(json_logs: bool) -> list[Any]:
    chain: list[Any] = [structlog.stdlib.ProcessorFormatter.remove_processors_meta]
    if json_logs:
        chain += [structlog.processors.format_exc_info, structlog.processors.JSONRenderer()]
    else:
        chain.append(structlog.dev.ConsoleRenderer())
    return chain


def setup_logging(config: ObservabilityConfig) -> None:
    """Install a single structlog-formatted stderr handler on the root logger.

    JSON is used when ``config.json_logs`` is set or stderr is not a TTY.
    Calling it again replaces the previous handler.
    """
    level = getattr(logging, config.log_level.upper(), logging.INFO)
    json_logs = config.json_logs or not sys.stderr.isatty()

    structlog.configure(
        processors=[*_pre_chain(), structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=_pre_chain(),
            processors=_render_chain(json_logs),
        )
    )

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(level)

    logging.getLogger("symptom_dialogue").setLevel(level)
    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.WARNING))
