"""Delivery of decoded envelopes to caller continuations."""

from typing import Callable, Optional, TypeVar

R = TypeVar("R")

Callback = Callable[[R], None]


def dispatch(response: R, callback: Optional[Callback] = None) -> R:
    """Hand ``response`` to ``callback`` once, on the calling thread, and return it.

    Only decoded envelopes get here (``ok`` true or false alike). Transport
    and decode failures are raised before dispatch and never reach the
    callback.
    """
    if callback is not None:
        callback(response)
    return response
