"""Exception hierarchy raised by the tracing core.

Every error derives from :class:`TracingError` and from the builtin exception
that best matches it, so callers may catch either.
"""

from __future__ import annotations


class TracingError(Exception):
    """Base class for all tracing-simulation errors."""


class ConfigurationError(TracingError, ValueError):
    """Invalid simulation parameters, detected before a simulation exists."""


class OutOfBoundsError(TracingError, ValueError):
    """A location lies outside the board extent."""


class NullAgentError(TracingError, TypeError):
    """A required agent reference is missing."""


class ExceedingRoundError(TracingError, ValueError):
    """A round snapshot was requested beyond the simulation's last round."""


class ObserverAsleepError(TracingError, RuntimeError):
    """A transmission was delivered to an observer that is not awake."""
