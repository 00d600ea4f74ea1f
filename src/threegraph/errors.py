"""Exception types raised by threegraph."""


class SceneGraphError(Exception):
    """Base class for all threegraph errors."""


class InvalidArgumentError(SceneGraphError, ValueError):
    """An argument was missing, None or malformed."""


class TypeResolutionError(SceneGraphError, ValueError):
    """A discriminator tag has no registered variant."""

    def __init__(self, tag: str, known: list[str] | None = None) -> None:
        self.tag = tag
        self.known = sorted(known or [])
        message = f"Unknown type: {tag!r}"
        if self.known:
            message += f" (known types: {', '.join(self.known)})"
        super().__init__(message)


class CycleError(SceneGraphError, ValueError):
    """Adding a node would make it its own descendant."""


class DanglingReferenceError(SceneGraphError, ValueError):
    """A node references a geometry or material its scene does not own."""

    def __init__(self, uuid: str, message: str) -> None:
        self.uuid = uuid
        super().__init__(message)


class DecodeError(SceneGraphError, ValueError):
    """A JSON document does not have the expected shape."""
