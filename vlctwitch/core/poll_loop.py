"""Fixed-interval loop that keeps running whatever a single cycle does."""
import logging
import threading
from typing import Callable, Optional

logger = logging.getLogger(__name__)


def poll_forever(
    step: Callable[[], object],
    interval_sec: float,
    stop_event: Optional[threading.Event] = None,
) -> None:
    """Run step, then wait interval_sec, until stop_event is set.

    Exceptions from step are logged and dropped; the next cycle runs on
    schedule. KeyboardInterrupt is not an Exception and still ends the loop.
    """
    stop_event = stop_event or threading.Event()
    while not stop_event.is_set():
        try:
            step()
        except Exception as e:
            logger.error("An error occurred while refreshing: %s", e)
            logger.debug("Cycle failure details", exc_info=True)
        if stop_event.wait(timeout=interval_sec):
            break
