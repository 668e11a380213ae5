"""sysprobe - periodic host metrics sampler."""

__version__ = "0.1.0"
