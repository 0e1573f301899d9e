"""Weather Dialog - a gesture-driven spoken questionnaire on a segmented LED strip."""

__version__ = "0.1.0"
