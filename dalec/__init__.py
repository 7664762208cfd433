"""Package spec model, build client options, target listings and schema fix-ups."""

__version__ = "0.1.0"