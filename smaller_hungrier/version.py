"""Version information for the SmallerHungrier plugin."""

__version__ = "1.1.0"
