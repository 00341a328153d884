"""ideathread: append-only idea threads stored as plain markdown documents."""

__version__ = "0.1.0"
