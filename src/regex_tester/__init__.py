"""Interactive regex tester: editing and evaluation core plus a Textual host."""

__all__ = [
    "actions",
    "adapters",
    "buffer",
    "dispatch",
    "evaluation",
    "keymaps",
    "runtime",
    "session",
]

__version__ = "0.1.0"
