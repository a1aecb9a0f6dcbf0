"""Single-settlement callback chaining.

A ``Deferred`` is settled once with a tuple of arguments and hands that tuple
to every handler registered with ``then``. Unlike asyncio futures, handlers
run synchronously: inside ``exec`` for handlers queued before settlement, and
inside ``then`` for handlers registered afterwards.
"""

from __future__ import annotations

import asyncio
import logging
import types
import typing as t

_logger = logging.getLogger("linnet")

Callback = t.Callable[..., t.Any]


@t.runtime_checkable
class Thenable(t.Protocol):
    """Anything that accepts a settlement callback through ``then``."""

    def then(self, callback: Callback, context: t.Any = None) -> t.Any: ...


def is_thenable(value: object) -> bool:
    """Return True if ``value`` exposes a callable ``then``."""
    return isinstance(value, Thenable) and callable(value.then)


def _forward(value: t.Any, chained: Deferred) -> None:
    # Only one level of thenable is unwrapped
    if is_thenable(value):
        value.then(chained.exec)
    else:
        chained.exec(value)


class Deferred:
    """A promise-like object settled exactly once.

    Attributes:
        finished: Whether the deferred has been settled.
        result: The settlement arguments, None until settled.
        handlers: Callbacks waiting for settlement.

    Example:
        ```python
        deferred = Deferred()
        deferred.then(lambda err, body, transport: print(body))
        deferred.exec(False, "ok", None)  # prints "ok"
        ```

    """

    def __init__(self) -> None:
        """Initialize an unsettled Deferred."""
        self.finished = False
        self.result: tuple[t.Any, ...] | None = None
        self.handlers: list[Callback] = []

    def __repr__(self) -> str:
        """Return a short description of the settlement state."""
        state = "finished" if self.finished else f"pending, {len(self.handlers)} handlers"
        return f"<Deferred {state}>"

    def exec(self, *args: t.Any) -> bool:
        """Settle the deferred and fire the queued handlers in order.

        A handler that raises is logged and the remaining handlers still run.

        Args:
            *args: Settlement arguments passed positionally to every handler.

        Returns:
            bool: True if this call settled the deferred, False if it was
                already settled and the call was ignored.

        """
        if self.finished:
            _logger.debug("Ignoring repeated settlement of %r", self)
            return False
        self.result = args
        self.finished = True
        handlers, self.handlers = self.handlers, []
        for handler in handlers:
            try:
                handler(*args)
            except Exception:
                _logger.exception("Handler failed for %r", self)
        return True

    def then(self, callback: Callback, context: t.Any = None) -> Deferred:
        """Register a callback for the settlement arguments.

        If the deferred is already settled the callback runs right away.
        Its return value settles the returned deferred; a thenable return
        value is followed one level, so the returned deferred settles with
        whatever that thenable settles with.

        Args:
            callback: Called with the settlement arguments.
            context: If given, bound to the callback as its first argument.

        Returns:
            Deferred: A new deferred settled from the callback's return value.

        """
        if context is not None:
            callback = types.MethodType(callback, context)
        chained = Deferred()

        if self.finished:
            assert self.result is not None
            _forward(callback(*self.result), chained)
        else:
            def handler(*args: t.Any) -> None:
                _forward(callback(*args), chained)

            self.handlers.append(handler)
        return chained

    # Success and failure share the single settlement channel
    done = then
    error = then

    def __await__(self) -> t.Generator[t.Any, None, tuple[t.Any, ...]]:
        """Wait for settlement and return the settlement arguments."""
        future: asyncio.Future[tuple[t.Any, ...]] = asyncio.get_running_loop().create_future()

        def resolve(*args: t.Any) -> None:
            if not future.done():
                future.set_result(args)

        self.then(resolve)
        return (yield from future.__await__())
