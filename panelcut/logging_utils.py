from __future__ import annotations

import inspect
import logging
import reprlib
from functools import wraps
from typing import Any, Callable, Mapping, Optional, Sequence, Tuple, TypeVar, cast

import numpy as np

F = TypeVar("F", bound=Callable[..., Any])

_repr = reprlib.Repr()
_repr.maxother = 160
_repr.maxdict = 10
_repr.maxlist = 10
_repr.maxtuple = 10


def _sequence_brackets(value: Sequence[Any]) -> Tuple[str, str]:
    if isinstance(value, tuple):
        return "(", ")"
    return "[", "]"


def _summarize_geometry(value: Any) -> Optional[str]:
    # Local imports keep this module importable from the geometry modules.
    from .geometry import GeometryBundle
    from .params import StyleParameters
    from .rng import RandomStream

    if isinstance(value, GeometryBundle):
        counts = ", ".join(f"{key}={count}" for key, count in value.counts().items())
        return f"GeometryBundle({counts})"
    if isinstance(value, RandomStream):
        return repr(value)
    if isinstance(value, StyleParameters):
        return (
            f"StyleParameters(sub_style={value.sub_style!r}, density={value.density:.6g}, "
            f"scale={value.scale!r}, min_bridge_gap={value.min_bridge_gap:.6g}, "
            f"layout_mode={value.layout_mode!r})"
        )
    return None


def _safe_repr(value: Any, *, max_items: int = 5, max_length: int = 400) -> str:
    summary = _summarize_geometry(value)
    if summary is not None:
        return summary

    if isinstance(value, np.ndarray):
        parts = [f"ndarray(shape={tuple(value.shape)}, dtype={value.dtype})"]
        if 0 < value.size <= max_items:
            parts.append(f"values={_repr.repr(value.tolist())}")
        elif value.size > max_items:
            parts.append(f"min={float(value.min()):.6g}, max={float(value.max()):.6g}")
        return ", ".join(parts)

    if isinstance(value, dict):
        items = []
        for idx, (key, val) in enumerate(value.items()):
            if idx >= max_items:
                items.append("...")
                break
            items.append(f"{_safe_repr(key)}: {_safe_repr(val)}")
        return "{" + ", ".join(items) + "}"

    if isinstance(value, (list, tuple)) and not hasattr(value, "_fields"):
        open_br, close_br = _sequence_brackets(value)
        items = []
        for idx, item in enumerate(value):
            if idx >= max_items:
                items.append(f"... ({len(value)} items)")
                break
            items.append(_safe_repr(item))
        return f"{open_br}{', '.join(items)}{close_br}"

    rendered = _repr.repr(value)
    if len(rendered) > max_length:
        return rendered[:max_length] + "... (truncated)"
    return rendered


def _format_call(signature: Optional[inspect.Signature], args: Sequence[Any], kwargs: Mapping[str, Any]) -> str:
    if signature is not None:
        try:
            bound = signature.bind(*args, **kwargs)
        except TypeError:
            pass
        else:
            return ", ".join(f"{key}={_safe_repr(value)}" for key, value in bound.arguments.items())
    rendered = [_safe_repr(arg) for arg in args]
    rendered.extend(f"{key}={_safe_repr(value)}" for key, value in kwargs.items())
    return ", ".join(rendered)


def debug_log_call(logger: logging.Logger) -> Callable[[F], F]:
    """Log each call and its result at DEBUG.

    Arguments are bound to their parameter names, so a call logs as
    ``synthesize_modern(width=400, height=600, seed=42, params=...)``.
    Nothing is formatted unless DEBUG is enabled on ``logger``.
    """

    def decorator(func: F) -> F:
        if getattr(func, "_debug_logging_wrapped", False):
            return func

        try:
            signature: Optional[inspect.Signature] = inspect.signature(func)
        except (TypeError, ValueError):
            signature = None
        qualname = getattr(func, "__qualname__", func.__name__)

        @wraps(func)
        def wrapper(*args: Any, **kwargs: Any):
            if not logger.isEnabledFor(logging.DEBUG):
                return func(*args, **kwargs)
            logger.debug("%s(%s)", qualname, _format_call(signature, args, kwargs))
            result = func(*args, **kwargs)
            logger.debug("%s -> %s", qualname, _safe_repr(result))
            return result

        setattr(wrapper, "_debug_logging_wrapped", True)
        return cast(F, wrapper)

    return decorator
