"""Logging setup for the Linear MCP server.

Every record carries the tool call it belongs to (``tool_name`` and
``request_id``), taken from contextvars so concurrent calls never mix.
Records go to stderr; stdout belongs to the MCP stdio transport.
"""

import json
import logging
import sys
from contextvars import ContextVar
from typing import Dict, Optional

CONTEXT_FIELDS = ("tool_name", "request_id")

_context: Dict[str, ContextVar] = {
    name: ContextVar(name, default=None) for name in CONTEXT_FIELDS
}

# Short labels used by the console format
_LABELS = {"tool_name": "tool", "request_id": "req"}


def set_log_context(tool_name: Optional[str] = None, request_id: Optional[str] = None):
    """Attach a tool call to log records emitted from the current task."""
    for name, value in (("tool_name", tool_name), ("request_id", request_id)):
        if value is not None:
            _context[name].set(value)


def clear_log_context():
    for var in _context.values():
        var.set(None)


def get_log_context() -> Dict[str, str]:
    return {name: var.get() for name, var in _context.items() if var.get()}


class ToolCallFilter(logging.Filter):
    """Copies the current tool call context onto each record."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.tool_context = get_log_context()
        return True


def _context_of(record: logging.LogRecord) -> Dict[str, str]:
    return getattr(record, "tool_context", None) or {}


class JSONFormatter(logging.Formatter):
    """One JSON object per line, for log shippers."""

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "time": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            **_context_of(record),
        }
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(entry, default=str)


class ConsoleFormatter(logging.Formatter):
    """Plain text for local runs: ``[time] LEVEL logger: message [tool=..., req=...]``."""

    def __init__(self):
        super().__init__(datefmt="%Y-%m-%d %H:%M:%S")

    def format(self, record: logging.LogRecord) -> str:
        line = (
            f"[{self.formatTime(record, self.datefmt)}] {record.levelname:8s} "
            f"{record.name}: {record.getMessage()}"
        )
        context = _context_of(record)
        if context:
            tags = ", ".join(f"{_LABELS[k]}={v}" for k, v in context.items())
            line += f" [{tags}]"
        if record.exc_info:
            line += "\n" + self.formatException(record.exc_info)
        return line


def configure_logging(environment: str = "development", log_level: str = "INFO"):
    """Install the stderr handler on the root logger.

    Args:
        environment: "production" selects JSON lines; anything else plain text.
        log_level: level name such as DEBUG or WARNING. Unknown names fall
            back to INFO.
    """
    handler = logging.StreamHandler(sys.stderr)
    handler.addFilter(ToolCallFilter())
    handler.setFormatter(JSONFormatter() if environment == "production" else ConsoleFormatter())

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(getattr(logging, log_level.upper(), logging.INFO))

    # GraphQL payloads are logged by the client at debug level already
    for noisy in ("httpx", "httpcore", "mcp.server.lowlevel.server"):
        logging.getLogger(noisy).setLevel(logging.WARNING)
