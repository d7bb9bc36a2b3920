from __future__ import annotations

import inspect

from dataclasses import dataclass, field
from typing import Any, Callable

Callback = Callable[..., Any]


@dataclass(slots=True, eq=False)
class Listener:
    """One registration of a callback under a pattern.

    Attributes
    ----------
    callback
        Invoked with the emit's positional arguments; its return value is
        ignored.
    once
        ``True`` → the record is removed from the registry right before its
        first dispatch.
    pattern
        The pattern string the callback was registered under (exact name,
        ``*`` glob or ``**``).
    fired
        Set once a once-listener has been claimed by an emit. Only the emitter
        flips it, under its registry lock; explicit removal leaves it alone.

    Records compare by identity: registering the same callback twice yields
    two distinct, independently removable records.
    """

    callback: Callback
    once: bool = False
    pattern: str = ""
    fired: bool = field(default=False, init=False, repr=False)

    def __call__(self, *args: Any) -> None:
        self.callback(*args)

    def __repr__(self) -> str:
        name = getattr(self.callback, "__qualname__", repr(self.callback))
        flag = " once" if self.once else ""
        return f"<Listener {self.pattern!r} -> {name}{flag}>"


def same_callback(a: Callback, b: Callback) -> bool:
    """Identity check used for removal.

    Bound methods are rebuilt on every attribute access, so ``obj.m is obj.m``
    is false; they match when both the instance and the function are the same
    objects.
    """
    if a is b:
        return True
    if inspect.ismethod(a) and inspect.ismethod(b):
        return a.__self__ is b.__self__ and a.__func__ is b.__func__
    return False
