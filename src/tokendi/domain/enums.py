from enum import Enum


class Lifetime(str, Enum):
    """Defines the lifetime of a resolved instance.

    Attributes:
        PER_REQUEST: New instance built on every resolution.
        SCOPED: Single instance per scope (e.g., per HTTP request).
        SINGLETON: Single instance shared for the whole life of the container.
    """

    PER_REQUEST = "per_request"
    SCOPED = "scoped"
    SINGLETON = "singleton"

    def __str__(self) -> str:
        return self.value
