"""Weekly changelog generation from completed Shortcut stories."""

__version__ = "0.1.0"
