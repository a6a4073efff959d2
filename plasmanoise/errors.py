from __future__ import annotations


class ConfigurationError(ValueError):
    """Raised for parameters that cannot define any output field."""
