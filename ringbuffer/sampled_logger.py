"""Sampled logger for high-frequency log messages.

Provides utilities to reduce log spam by only logging at configurable intervals.
"""

import logging
from collections.abc import Callable

logger = logging.getLogger(__name__)


def make_sampled_logger(
    log_format: str,
    log_interval: int = 1000,
    target_logger: logging.Logger | None = None,
    level: int = logging.INFO,
) -> Callable[..., None]:
    """Create a sampled logger that logs the first event and every Nth after.

    Returns a function that counts events and emits a log record when:
    - The first event is counted
    - The running count reaches or passes a multiple of log_interval

    A single call may count several events at once (``count=``), e.g. a bulk
    operation that dropped many elements; it still logs at most once.

    Args:
        log_format: Format string for the log message. First placeholder receives
                    the running event count, remaining placeholders receive
                    format_args.
        log_interval: Log every Nth event (default 1000)
        target_logger: Logger instance to use (default: module logger)
        level: Log level to use (default: INFO)

    Returns:
        A function: (*format_args, count=1) -> None
    """
    if log_interval < 1:
        raise ValueError(f"log_interval must be >= 1, got {log_interval}")

    event_counter = 0
    _logger = target_logger or logger

    def log_sampled(*format_args: object, count: int = 1) -> None:
        nonlocal event_counter

        if count <= 0:
            return

        previous = event_counter
        event_counter += count
        is_first = previous == 0
        crossed_interval = event_counter // log_interval > previous // log_interval

        if is_first or crossed_interval:
            _logger.log(level, log_format, event_counter, *format_args)

    return log_sampled
