"""Users, projects and tasks with a plain-text store and an interactive console menu."""

__version__ = "1.0.0"
__all__ = ["task", "project", "user", "workspace", "cli"]