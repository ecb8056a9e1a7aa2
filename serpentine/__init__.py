"""A terminal snake game with stages, gates and a spinning windmill."""

__version__ = "0.1.0"
__all__ = ["serpent", "stage", "ui"]