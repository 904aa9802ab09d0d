"""
Errors raised by the core and its ports
"""


class InputValidationError(ValueError):
    """Missing, unparsable or out-of-order range bounds"""


class StoreReadError(RuntimeError):
    """A partition could not be read from storage"""


class StoreWriteError(RuntimeError):
    """A partition could not be written to storage"""
