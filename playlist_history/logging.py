"""
Logging configuration for the playlist history engine using eliot.

Engine operations run inside eliot actions and emit structured messages, so a
host application can trace every add, removal, undo and redo with its context.
"""

import eliot
import logging
import sys
from eliot import FileDestination, log_message, write_traceback
from eliot.stdlib import EliotHandler
from pathlib import Path
from playlist_history import config


class HumanReadableDestination:
    """Destination that formats history messages in a human-readable format."""

    def __init__(self, file):
        self.file = file

    def __call__(self, message):
        """Format and write log message."""
        # Skip eliot's own action start/finish messages
        if not message.get("message_type"):
            return

        msg_type = message["message_type"]

        if msg_type == "history_operation":
            output = f"[HISTORY] {message.get('operation', '')}"
            item_id = message.get("item_id")
            if item_id:
                output += f": {item_id}"
            output += f" (undo={message.get('undo_depth', 0)}, redo={message.get('redo_depth', 0)})"
        elif msg_type == "history_noop":
            output = f"[HISTORY] {message.get('operation', '')} ignored: {message.get('reason', '')}"
        elif msg_type == "invalid_input":
            output = f"[HISTORY] rejected {message.get('operation', '')}: {message.get('error', '')}"
        elif "message" in message:
            output = message["message"]
        else:
            return

        if output and output.strip():
            self.file.write(output + "\n")
            self.file.flush()


# Destinations added by setup_logging(); replaced on each call
_active_destinations: list = []


def setup_logging(log_level: str | None = None, log_file: str | None = None) -> list:
    """
    Set up eliot logging.

    Calling it again replaces the destinations from the previous call, closing
    any log file it had opened, so output is never duplicated.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL); defaults to LOG_LEVEL
        log_file: Optional file path for raw JSON logs; defaults to LOG_FILE.
            Stdout always gets readable output.

    Returns:
        The eliot destinations that were added
    """
    teardown_logging()

    log_level = log_level or config.LOG_LEVEL
    log_file = log_file or config.LOG_FILE

    destinations = [HumanReadableDestination(sys.stdout)]

    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        destinations.append(FileDestination(file=open(log_path, "a")))

    eliot.add_destinations(*destinations)
    _active_destinations.extend(destinations)

    # Route stdlib logging through eliot
    logger = logging.getLogger()
    logger.setLevel(getattr(logging, log_level.upper(), logging.INFO))
    if not any(isinstance(handler, EliotHandler) for handler in logger.handlers):
        logger.addHandler(EliotHandler())

    log_message(message_type="logging_setup", log_level=log_level, log_file=str(log_file or "stdout"), message="Eliot logging configured")
    return destinations


def teardown_logging() -> None:
    """Remove the destinations added by setup_logging() and close its log file."""
    while _active_destinations:
        destination = _active_destinations.pop()
        eliot.remove_destination(destination)
        if isinstance(destination, FileDestination):
            destination.file.close()


def log_history_operation(operation: str, **context):
    """
    Log a recorded playlist change.

    Args:
        operation: History operation (add, remove, clear, undo, redo, restore)
        **context: Additional context data
    """
    log_message(message_type="history_operation", operation=operation, **context)


def log_history_noop(operation: str, reason: str, **context):
    """
    Log a request that left the playlist and its history untouched.

    Args:
        operation: Requested operation
        reason: Why nothing happened
        **context: Additional context data
    """
    log_message(message_type="history_noop", operation=operation, reason=reason, **context)


def log_invalid_input(operation: str, error: Exception, **context):
    """
    Log rejected input with the traceback of the error about to be raised.

    Args:
        operation: Operation that rejected the input
        error: Exception being raised
        **context: Additional context data
    """
    log_message(message_type="invalid_input", operation=operation, error=str(error), error_type=type(error).__name__, **context)


def log_error(error: Exception, **context):
    """
    Log errors with full context and traceback.

    Args:
        error: Exception that occurred
        **context: Additional context data
    """
    write_traceback(exc_info=sys.exc_info())
    log_message(message_type="error_occurred", error_message=str(error), error_type=type(error).__name__, **context)
