from __future__ import annotations

import asyncio
from typing import Any, Callable, Optional


class ObserverContext:
    """The one execution context allowed to mutate UI-visible stores.

    Bound to an asyncio event loop. Code running on another thread (a worker
    pool, a callback from a blocking library) hands work over with `call()`,
    which queues it on the loop instead of touching state directly.
    """

    def __init__(self, loop: Optional[asyncio.AbstractEventLoop] = None) -> None:
        self._loop = loop or asyncio.get_running_loop()

    @property
    def loop(self) -> asyncio.AbstractEventLoop:
        return self._loop

    def is_current(self) -> bool:
        try:
            return asyncio.get_running_loop() is self._loop
        except RuntimeError:
            return False

    def ensure_current(self, what: str = "store") -> None:
        if not self.is_current():
            raise RuntimeError(f"{what} must be mutated on its observer context (event loop)")

    def call(self, fn: Callable[..., Any], *args: Any) -> Optional[asyncio.Handle]:
        """Run `fn(*args)` now when on the loop, else schedule it there.

        Returns the scheduled handle for a hand-off, None for an inline call.
        """
        if self.is_current():
            fn(*args)
            return None
        return self._loop.call_soon_threadsafe(fn, *args)
