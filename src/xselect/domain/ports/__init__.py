from .hooks import (
    NOOP_OBJECT_HOOK,
    NOOP_SELECTOR_HOOK,
    HookOutcome,
    ObjectHook,
    SelectorHook,
)

__all__ = [
    "NOOP_OBJECT_HOOK",
    "NOOP_SELECTOR_HOOK",
    "HookOutcome",
    "ObjectHook",
    "SelectorHook",
]
