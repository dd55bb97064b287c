"""Exceptions raised by the global fee package."""


class GlobalFeeError(Exception):
    """Base class for every error raised by this package."""


class InvalidTypeError(GlobalFeeError, TypeError):
    """A parameter value has the wrong type."""


class InvalidCoinsError(GlobalFeeError, ValueError):
    """A coin or a set of coins is malformed."""


class InsufficientFeeError(GlobalFeeError):
    """A transaction does not pay the fee that is required."""


class TxDecodeError(GlobalFeeError):
    """A transaction does not have the shape that is expected."""