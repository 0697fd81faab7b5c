"""Domain errors raised by the repositories, services and router."""


class ScorekeepError(Exception):
    """Base class for every error raised by the ``app`` package."""


class EntityNotFound(ScorekeepError):
    """The entity file does not exist or could not be read."""

    def __init__(self, kind: str, slug: str) -> None:
        super().__init__(f"{kind} '{slug}' not found")
        self.kind = kind
        self.slug = slug


class EntityDecodeError(ScorekeepError):
    """The entity file exists but its content is not a valid entity."""

    def __init__(self, kind: str, slug: str, reason: str) -> None:
        super().__init__(f"{kind} '{slug}' could not be decoded: {reason}")
        self.kind = kind
        self.slug = slug
        self.reason = reason


class EntitySaveError(ScorekeepError):
    """Writing the entity file failed.  The ``OSError`` is chained."""

    def __init__(self, kind: str, slug: str) -> None:
        super().__init__(f"{kind} '{slug}' could not be saved")
        self.kind = kind
        self.slug = slug


class DirectoryScanError(ScorekeepError):
    """The data directory could not be listed."""

    def __init__(self, path: str) -> None:
        super().__init__(f"could not scan data directory {path!r}")
        self.path = path


class RouteNotFound(ScorekeepError):
    """No route in the routing table matches the request path."""

    def __init__(self, path: str) -> None:
        super().__init__(f"no route for {path!r}")
        self.path = path
