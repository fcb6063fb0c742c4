import functools
from typing import Callable, TypeVar

T = TypeVar("T")

_INSTANCE_ATTR = "_instance"


def singleton(func: Callable[[], T]) -> Callable[[], T]:
    """Cache the first return value of a zero-argument factory.

    The cached value lives on ``func._instance``; ``wrapper.reset()``
    drops it so the next call rebuilds (used by tests that change the
    environment).
    """

    @functools.wraps(func)
    def wrapper() -> T:
        if not hasattr(func, _INSTANCE_ATTR):
            setattr(func, _INSTANCE_ATTR, func())
        return getattr(func, _INSTANCE_ATTR)

    def reset() -> None:
        if hasattr(func, _INSTANCE_ATTR):
            delattr(func, _INSTANCE_ATTR)

    wrapper.reset = reset  # type: ignore[attr-defined]
    return wrapper
