"""Exception hierarchy for fuzzyfilter."""


class FuzzyFilterError(Exception):
    """Base exception for all fuzzyfilter errors."""


class ValidationError(FuzzyFilterError, ValueError):
    """Raised when input validation fails (invalid parameters, out of range values)."""


class AlgorithmError(FuzzyFilterError, ValueError):
    """Raised when an unknown or unsupported algorithm is specified."""


__all__ = ["FuzzyFilterError", "ValidationError", "AlgorithmError"]
