"""Run independent side effects together and collect every result.

``settle_all`` is a join: each call runs on its own worker thread, and a
failure in one call never cancels or hides the others. Each call settles to
a ``Settled`` holding its return value or the exception it raised.
"""
import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Any, Callable, Mapping, Optional

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Settled:
    name: str
    value: Any = None
    error: Optional[BaseException] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def error_message(self) -> str:
        if self.error is None:
            return ""
        return str(self.error) or "Unknown error"


def settle_all(calls: Mapping[str, Callable[[], Any]]) -> dict[str, Settled]:
    if not calls:
        return {}
    settled: dict[str, Settled] = {}
    with ThreadPoolExecutor(max_workers=len(calls), thread_name_prefix="fanout") as pool:
        futures = {name: pool.submit(call) for name, call in calls.items()}
        for name, future in futures.items():
            try:
                settled[name] = Settled(name, value=future.result())
            except Exception as exc:
                logger.warning("%s failed: %s", name, exc)
                settled[name] = Settled(name, error=exc)
    return settled
