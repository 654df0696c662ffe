from __future__ import annotations

from typing import Any

_REPR_MAX_LENGTH = 120


def inspect_object(obj: Any) -> str:
    """Return a short human-readable description of ``obj`` for error messages.

    Objects with a custom ``__repr__`` are described by it (truncated); other
    instances render as ``<module.QualName:0x...>``.
    """
    obj_type = type(obj)
    if obj_type.__repr__ is object.__repr__:
        return f"<{obj_type.__module__}.{obj_type.__qualname__}:{id(obj):#x}>"
    try:
        text = repr(obj)
    except Exception:  # noqa: BLE001
        return f"<{obj_type.__qualname__} (unrepresentable):{id(obj):#x}>"
    if len(text) > _REPR_MAX_LENGTH:
        return text[: _REPR_MAX_LENGTH - 3] + "..."
    return text


__all__ = ["inspect_object"]
