from __future__ import annotations

from dataclasses import fields, is_dataclass
from datetime import datetime
from typing import Any, FrozenSet, Mapping

from .outcome import AsyncOutcome


def to_serializable(obj: Any, _seen: FrozenSet[int] = frozenset()) -> Any:
    """
    Best-effort conversion of outcomes and their payloads to serializable forms.

    - outcomes -> {"state": "loaded" | "loading" | "failed", ...fields}
    - exceptions -> {"type": qualified name, "message": str(exc)}
    - dataclasses -> dict of their fields (read in place, never copied)
    - datetime -> isoformat()
    - mappings/sequences -> transformed recursively
    - otherwise return as-is

    Cancellers and tracebacks are reduced to flags; they are not data.
    A container reached again through itself is rendered as "<cycle>".
    """
    if isinstance(obj, AsyncOutcome):
        return obj.map(
            on_loaded=lambda d: {
                "state": "loaded",
                "value": to_serializable(d.value, _seen),
            },
            on_failed=lambda e: {
                "state": "failed",
                "error": to_serializable(e.error, _seen),
                "has_trace": e.stack_trace is not None,
            },
            on_loading=lambda lo: {
                "state": "loading",
                "progress": lo.progress,
                "cancellable": lo.canceller is not None,
            },
        )

    if isinstance(obj, BaseException):
        return {"type": type(obj).__qualname__, "message": str(obj)}

    if isinstance(obj, datetime):
        return obj.isoformat()

    is_instance = is_dataclass(obj) and not isinstance(obj, type)
    if not (is_instance or isinstance(obj, (Mapping, list, tuple, set))):
        return obj

    if id(obj) in _seen:
        return "<cycle>"
    seen = _seen | {id(obj)}

    if is_instance:
        return {f.name: to_serializable(getattr(obj, f.name), seen) for f in fields(obj)}

    if isinstance(obj, Mapping):
        return {k: to_serializable(v, seen) for k, v in obj.items()}

    # sequences (but not str/bytes)
    return [to_serializable(v, seen) for v in obj]
