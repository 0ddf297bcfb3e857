"""One-shot readiness signalling.

A :class:`ReadinessSignal` is the primitive every provided value hangs off:
consumers subscribe to it, and the provider marks it ready exactly once. A
:class:`CountdownLatch` gathers several signals into a single completion
callback.
"""

import logging
from typing import Callable, Generic, Optional, TypeVar

from canopy.errors import ProviderNotReadyError

__all__ = ["ReadinessSignal", "CountdownLatch"]

logger = logging.getLogger(__name__)

T = TypeVar("T")

Callback = Callable[[], None]


class ReadinessSignal(Generic[T]):
    """Single-slot publish/subscribe primitive.

    Subscribers registered before :meth:`mark_ready` are called once, in
    subscription order, when it runs. Subscribers registered afterwards are
    called immediately. Only the first call to :meth:`mark_ready` has any
    effect; later calls are ignored and return ``False``.

    Callbacks receive no arguments and are expected to read :attr:`value`
    (or the owning capability) themselves.

    Example:
        >>> signal = ReadinessSignal()
        >>> signal.subscribe(lambda: print("ready:", signal.value))
        >>> signal.mark_ready(42)
        ready: 42
    """

    def __init__(self, name: Optional[str] = None):
        self.name = name
        self._ready = False
        self._value: Optional[T] = None
        self._pending: list[Callback] = []

    @property
    def ready(self) -> bool:
        return self._ready

    @property
    def value(self) -> T:
        """The value stored by :meth:`mark_ready`.

        Raises:
            ProviderNotReadyError: If the signal has not been marked ready.
        """
        if not self._ready:
            raise ProviderNotReadyError(f"Signal {self._label()} is not ready yet")
        return self._value

    @property
    def pending(self) -> int:
        """Number of subscribers still waiting for the signal."""
        return len(self._pending)

    def subscribe(self, callback: Callback) -> None:
        """Call ``callback`` once the signal is ready, or now if it already is."""
        if self._ready:
            callback()
        else:
            self._pending.append(callback)

    def unsubscribe(self, callback: Callback) -> bool:
        """Drop a pending subscriber.

        Returns:
            True if ``callback`` was waiting, False if it was not (or already fired).
        """
        if callback in self._pending:
            self._pending.remove(callback)
            return True
        return False

    def mark_ready(self, value: T) -> bool:
        """Mark the signal ready and fire every pending subscriber.

        Every subscriber is called even if an earlier one raises. The first
        error is re-raised once all of them have run; later ones are logged.

        Args:
            value: The value to publish.

        Returns:
            True on the first call, False if the signal was already ready.
        """
        if self._ready:
            logger.debug("Ignoring repeated mark_ready on %s", self._label())
            return False

        self._ready = True
        self._value = value
        logger.debug("%s ready, notifying %d subscriber(s)", self._label(), len(self._pending))
        first_error: Optional[Exception] = None
        while self._pending:
            callback = self._pending.pop(0)
            try:
                callback()
            except Exception as error:
                if first_error is None:
                    first_error = error
                else:
                    logger.exception("Subscriber of %s failed", self._label())
        if first_error is not None:
            raise first_error
        return True

    def _label(self) -> str:
        return self.name or f"<signal {id(self):#x}>"

    def __repr__(self) -> str:
        state = "ready" if self._ready else f"pending={len(self._pending)}"
        return f"ReadinessSignal({self._label()}, {state})"


class CountdownLatch:
    """Fires ``on_complete`` once after ``count`` calls to :meth:`count_down`.

    Calls beyond the count are ignored, so ``on_complete`` runs at most once.
    """

    def __init__(self, count: int, on_complete: Callback):
        if count < 1:
            raise ValueError(f"Latch count must be at least 1, got {count}")
        self._remaining = count
        self._on_complete = on_complete

    @property
    def remaining(self) -> int:
        return self._remaining

    @property
    def completed(self) -> bool:
        return self._remaining == 0

    def count_down(self) -> None:
        if self._remaining == 0:
            return
        self._remaining -= 1
        if self._remaining == 0:
            self._on_complete()
