"""
Structured Logging — plain or JSON log lines for the ``imagebot`` logger tree.

Every module logs through ``logging.getLogger(__name__)``. Lines emitted while
a message is being handled carry that message's correlation id.
"""

import json
import logging
import sys
import uuid
from contextvars import ContextVar
from typing import Optional

# Context variables for per-message correlation
request_id_var: ContextVar[str] = ContextVar("request_id", default="")
user_id_var: ContextVar[str] = ContextVar("user_id", default="")

ROOT_LOGGER = "imagebot"
GATEWAY_LOGGER = "discord"
PLAIN_FORMAT = "%(asctime)s %(levelname)s %(name)s%(request_tag)s: %(message)s"


class RequestContextFilter(logging.Filter):
    """Copy the context variables onto every record."""

    def filter(self, record: logging.LogRecord) -> bool:
        req_id = request_id_var.get("")
        record.request_id = req_id
        record.request_tag = f" [{req_id}]" if req_id else ""
        record.user_id = user_id_var.get("")
        return True


class StructuredFormatter(logging.Formatter):
    """JSON structured log formatter."""

    def format(self, record: logging.LogRecord) -> str:
        log_entry = {
            "timestamp": self.formatTime(record),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        req_id = getattr(record, "request_id", "")
        if req_id:
            log_entry["request_id"] = req_id
        usr_id = getattr(record, "user_id", "")
        if usr_id:
            log_entry["user_id"] = usr_id

        if record.exc_info and record.exc_info[0]:
            log_entry["exception"] = {
                "type": record.exc_info[0].__name__,
                "message": str(record.exc_info[1]),
            }

        return json.dumps(log_entry)


_handler: Optional[logging.Handler] = None


def setup_logging(level: str = "INFO", json_output: bool = False) -> logging.Handler:
    """Install (or reconfigure) the stdout handler on the ``imagebot`` logger.

    Safe to call more than once: startup calls it with defaults before the
    config file is read and again once the settings are known.
    """
    global _handler

    root = logging.getLogger(ROOT_LOGGER)
    if _handler is None:
        _handler = logging.StreamHandler(sys.stdout)
        _handler.addFilter(RequestContextFilter())
        root.addHandler(_handler)
        logging.getLogger(GATEWAY_LOGGER).addHandler(_handler)

    if json_output:
        _handler.setFormatter(StructuredFormatter())
    else:
        _handler.setFormatter(logging.Formatter(PLAIN_FORMAT))

    numeric = getattr(logging, str(level).upper(), logging.INFO)
    root.setLevel(numeric)
    # discord.py is chatty below INFO
    logging.getLogger(GATEWAY_LOGGER).setLevel(max(numeric, logging.INFO))
    return _handler


def set_request_context(request_id: str = "", user_id: str = "") -> None:
    """Set context variables for the message being handled."""
    if request_id:
        request_id_var.set(request_id)
    if user_id:
        user_id_var.set(user_id)


def generate_request_id() -> str:
    """Generate a short correlation id."""
    return str(uuid.uuid4())[:12]
