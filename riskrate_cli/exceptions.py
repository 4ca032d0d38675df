from __future__ import annotations


class RiskRateError(Exception):
    """Base exception with user-friendly message."""
    pass


class ConfigError(RiskRateError):
    pass


class ApiError(RiskRateError):
    pass


class AuthenticationError(ApiError):
    pass


class SnapshotError(RiskRateError):
    """Raised when a tenant snapshot file cannot be read."""
    pass


class ValidationError(RiskRateError):
    """Malformed input data, e.g. a negative score or an unknown control type."""
    pass
