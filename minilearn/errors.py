"""Error taxonomy for minilearn models."""


class MiniLearnError(Exception):
    """Base class for all minilearn errors."""


class InvalidArgumentError(MiniLearnError, ValueError):
    """Raised for out-of-range hyperparameters or malformed inputs."""


class OutOfMemoryError(MiniLearnError, MemoryError):
    """Raised when model or transient storage cannot be allocated.

    A model that raises this during ``fit`` is left in its last fully
    updated state and remains usable.
    """
