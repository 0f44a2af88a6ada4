"""
Error types raised by the Neon Heights core.

Configuration errors are raised while a run is being built and must stop
the session from starting. Invariant violations signal a broken catalog
design and abort the operation that found them.
"""


class NeonHeightsError(Exception):
    """Base class for all core errors."""


class ConfigurationError(NeonHeightsError, ValueError):
    """Invalid noise parameters, seeds, catalog entries or config files."""


class InvariantViolation(NeonHeightsError, RuntimeError):
    """A runtime invariant of the core no longer holds."""
