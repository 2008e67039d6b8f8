"""Errors raised by the dispatcher before any provider is contacted."""
from __future__ import annotations

from ..base.errors import ErrorCode


class RequestError(ValueError):
    """A call was rejected during validation or routing.

    ``str(exc)`` is the exact message returned to the RPC caller.

    Attributes:
        code: ``VALIDATION`` for missing arguments, ``UNSUPPORTED`` for
            unroutable models, ``AUTH`` for missing credentials.
    """

    def __init__(self, message: str, code: ErrorCode = ErrorCode.VALIDATION) -> None:
        super().__init__(message)
        self.code = code


def missing_arg(name: str) -> RequestError:
    return RequestError(f"missing required arg: {name}")


__all__ = ["RequestError", "missing_arg"]
