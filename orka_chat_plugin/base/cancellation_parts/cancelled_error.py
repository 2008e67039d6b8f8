from __future__ import annotations


class CancelledError(RuntimeError):
    """The caller went away (or the call was otherwise abandoned) before it finished.

    Distinct from ``TimeoutError``, which signals an elapsed deadline.
    """


__all__ = ["CancelledError"]
