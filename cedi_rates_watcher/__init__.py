"""Core package for the Cedi rates watcher application."""

__all__ = [
    "config",
    "models",
    "api_client",
    "state_manager",
    "notifier",
    "checker",
    "cli",
]
