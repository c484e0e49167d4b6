class SizingError(ValueError):
    """Base class for every calculation error raised by the library."""


class InvalidInputError(SizingError):
    """Raised when an input is non-finite, out of its physical domain or unknown."""


class OutOfRangeError(SizingError):
    """Raised when a current falls outside the tabulated breaker or conductor range."""


class InvalidSizingSequenceError(SizingError):
    """Raised when load < breaker < conductor ampacity does not hold after selection."""
