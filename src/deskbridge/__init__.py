"""Backend command bridge for the desktop shell."""

__version__ = "0.1.0"
