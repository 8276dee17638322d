"""Interactive terminal prompts with auto-completion, history and key bindings."""

__version__ = "0.1.0"