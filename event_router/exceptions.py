"""Exceptions raised by the event router."""


class EventRouterError(Exception):
    """Base class for event router errors."""

    pass


class UsageError(EventRouterError):
    """Raised when the command line does not describe a routable event."""

    pass


class LabelParseError(EventRouterError):
    """Raised when the labels payload cannot be decoded."""

    pass


class AnnotationError(EventRouterError):
    """Raised when a routing comment could not be posted."""

    pass
