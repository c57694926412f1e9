from __future__ import annotations


class FortuneDataError(ValueError):
    """Raised when a fortune payload violates the input data contract."""
