"""UI-agnostic text-editing core for terminal line editors."""

__all__ = [
    "buffer",
    "runtime",
]

__version__ = "0.1.0"
