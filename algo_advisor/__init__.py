"""Algorithm Advisor — rule-based algorithm recommendations from dataset characteristics."""

__version__ = "0.1.0"
