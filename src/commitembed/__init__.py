"""commit-embed: turn a selection into a numbered theorem-style note and embed it back."""

__version__ = "0.3.0"
