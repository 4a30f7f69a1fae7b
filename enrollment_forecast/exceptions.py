"""Errors raised by the enrollment forecasting pipeline."""


class InsufficientDataError(ValueError):
    """A dataset lacks one of the two label classes where both are required."""
