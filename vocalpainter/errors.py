"""Exception types raised by the memory capture pipeline."""


class VocalPainterError(Exception):
    """Base class for pipeline errors."""


class DeviceAccessError(VocalPainterError):
    """The audio-input device was denied or could not be opened.

    Terminal for the current recording attempt; a fresh ``start()`` is the
    only way to recover.
    """


class PreconditionError(VocalPainterError):
    """An export or encode was requested before its upstream artifact exists."""


__all__ = ["VocalPainterError", "DeviceAccessError", "PreconditionError"]
