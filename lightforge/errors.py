"""
Exception types raised by LightForge.

Empty intersection lists, a missing hit and exhausted recursion depth are
ordinary results and never raise.
"""


class LightForgeError(Exception):
    """Base class for all LightForge errors."""
    pass


class ValidationError(LightForgeError, ValueError):
    """An operation was called with arguments that violate its preconditions."""
    pass


class ConfigurationError(LightForgeError, ValueError):
    """A scene object was configured with invalid parameters."""
    pass


class SingularMatrixError(ConfigurationError):
    """A matrix with zero determinant was inverted or used as a transform."""
    pass
