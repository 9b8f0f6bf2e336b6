"""Base exception for the parameter model."""


class AeroParamsError(Exception):
    """Base class for all errors raised by aeroparams."""
