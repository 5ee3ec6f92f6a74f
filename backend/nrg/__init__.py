"""NRG Pacer: live run tracking and energy-gel timing engine."""

__version__ = "0.1.0"
