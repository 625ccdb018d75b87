"""
Delayed callback dispatch for input storms.

A Dispatcher collapses a burst of rapid ``invoke`` calls into one delayed
callback. Two policies are available:

- DEBOUNCE: every call restarts the timer; the callback runs ``delay_ms``
  after the *last* call, with that call's arguments.
- SUPPRESS: calls arriving while a timer is pending are dropped; the callback
  runs ``delay_ms`` after the *first* call, with the first call's arguments.

Timers come from a scheduler with an asyncio-style ``call_later`` method.
By default the running asyncio event loop is used.

Usage:
    from calcpad.core.dispatch import debounce

    @debounce(50)
    def render(display: str) -> None:
        ...

    render("12")   # inside a running event loop
    render("123")  # restarts the timer; only "123" is rendered
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable
from enum import StrEnum
from typing import Any, Protocol, runtime_checkable

logger = logging.getLogger(__name__)


class DispatchPolicy(StrEnum):
    """How a Dispatcher treats calls that arrive while a timer is pending."""

    DEBOUNCE = "debounce"
    SUPPRESS = "suppress"


# =============================================================================
# Scheduler protocol
# =============================================================================


@runtime_checkable
class TimerHandle(Protocol):
    """A scheduled timer that can be cancelled before it fires."""

    def cancel(self) -> None: ...


@runtime_checkable
class Scheduler(Protocol):
    """Runs a callable after a delay. ``asyncio`` event loops satisfy this."""

    def call_later(self, delay: float, callback: Callable[[], Any]) -> TimerHandle: ...


class RunningLoopScheduler:
    """Schedules on whichever asyncio loop is running at call time."""

    def call_later(self, delay: float, callback: Callable[[], Any]) -> TimerHandle:
        loop = asyncio.get_running_loop()
        return loop.call_later(delay, callback)


# =============================================================================
# Dispatcher
# =============================================================================


class Dispatcher:
    """Wrap a callback so bursts of invocations collapse into one delayed call."""

    def __init__(
        self,
        callback: Callable[..., Any],
        delay_ms: float,
        policy: DispatchPolicy = DispatchPolicy.DEBOUNCE,
        scheduler: Scheduler | None = None,
    ) -> None:
        if delay_ms < 0:
            raise ValueError(f"delay_ms must be >= 0, got {delay_ms}")
        self.callback = callback
        self.delay_ms = delay_ms
        self.policy = DispatchPolicy(policy)
        self._scheduler: Scheduler = scheduler or RunningLoopScheduler()
        self._handle: TimerHandle | None = None

    @property
    def pending(self) -> bool:
        """True while a timer is scheduled and has not yet fired."""
        return self._handle is not None

    def invoke(self, *args: Any, **kwargs: Any) -> None:
        """Schedule the callback according to the configured policy."""
        if self._handle is not None:
            if self.policy == DispatchPolicy.SUPPRESS:
                logger.debug("Suppressed call to %s; timer already pending", self._name)
                return
            self._handle.cancel()
            logger.debug("Restarting %s timer (%sms)", self._name, self.delay_ms)
        else:
            logger.debug("Scheduling %s in %sms", self._name, self.delay_ms)

        self._handle = self._scheduler.call_later(
            self.delay_ms / 1000, lambda: self._fire(args, kwargs)
        )

    __call__ = invoke

    def cancel(self) -> None:
        """Drop any pending timer without running the callback."""
        if self._handle is None:
            return
        self._handle.cancel()
        self._handle = None
        logger.debug("Cancelled pending %s", self._name)

    def _fire(self, args: tuple[Any, ...], kwargs: dict[str, Any]) -> None:
        self._handle = None
        logger.debug("Firing %s", self._name)
        self.callback(*args, **kwargs)

    @property
    def _name(self) -> str:
        return getattr(self.callback, "__qualname__", repr(self.callback))

    def __repr__(self) -> str:
        return (
            f"Dispatcher({self._name}, delay_ms={self.delay_ms}, "
            f"policy={self.policy.value}, pending={self.pending})"
        )


def debounce(
    delay_ms: float, scheduler: Scheduler | None = None
) -> Callable[[Callable[..., Any]], Dispatcher]:
    """Decorator: run the wrapped function once after the last call in a burst."""

    def wrap(func: Callable[..., Any]) -> Dispatcher:
        return Dispatcher(func, delay_ms, DispatchPolicy.DEBOUNCE, scheduler)

    return wrap


def suppress(
    delay_ms: float, scheduler: Scheduler | None = None
) -> Callable[[Callable[..., Any]], Dispatcher]:
    """Decorator: run the wrapped function once after the first call in a burst."""

    def wrap(func: Callable[..., Any]) -> Dispatcher:
        return Dispatcher(func, delay_ms, DispatchPolicy.SUPPRESS, scheduler)

    return wrap
