from .normalize import clamp_scalar, normalize_series

__all__ = ["clamp_scalar", "normalize_series"]
