"""Error kinds raised by repositories."""


class RepositoryError(Exception):
    """Base exception for repository operations."""


class NotFoundError(RepositoryError):
    """No record is visible under the operation's visibility rule."""


class ConflictError(RepositoryError):
    """A unique attribute is already held by an active record."""
