"""semrel: semantic-versioned release tagging on top of git."""

__version__ = "0.1.0"
