import logging
import time
from collections.abc import Callable
from dataclasses import dataclass
from typing import TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class PollingStrategy:
    """Repeat a call until its result satisfies a predicate, or the time runs out.

    This is a time-boxed wait for endpoints known to answer with an empty result
    for a while after a change. It is not a retry policy: errors raised by the call
    propagate immediately.

    Args:
        max_duration: Seconds after the first call during which new attempts are started.
        interval: Seconds to sleep between two calls.
    """

    max_duration: float = 10.0
    interval: float = 1.0

    def poll(self, call: Callable[[], T], is_done: Callable[[T], bool]) -> T:
        """Call until is_done(result) is true and return the last result, which may still be unfinished."""
        started = time.monotonic()
        result = call()
        attempts = 1
        while not is_done(result):
            if time.monotonic() - started >= self.max_duration:
                logger.warning("Gave up polling after %d attempts and %.1f seconds", attempts, self.max_duration)
                break
            logger.debug("Result not ready after attempt %d, sleeping %.1f seconds", attempts, self.interval)
            time.sleep(self.interval)
            result = call()
            attempts += 1
        return result


LANGUAGES_POLLING = PollingStrategy(max_duration=10.0, interval=1.0)
