"""Error types raised by the Sprout core.

Every failure in the object store, commit graph or reference manager is
raised as a subclass of SproutError. Only the CLI decides how to present
them.
"""


class SproutError(Exception):
    """Base class for all Sprout errors."""


class NotFound(SproutError):
    """A requested object, commit, branch or file does not exist."""


class UnknownBranch(NotFound):
    """Checkout or lookup of a branch that does not exist."""


class NoCommits(SproutError):
    """The operation needs at least one commit on the active branch."""


class Corrupt(SproutError):
    """Stored data fails to parse or violates a graph invariant."""


class EmptyCommit(SproutError):
    """A commit was attempted with nothing staged."""


class AlreadyExists(SproutError):
    """A branch or repository with that name already exists."""


class IOFailure(SproutError):
    """The underlying storage failed to read or write."""


class InvalidName(SproutError):
    """A branch name that cannot be used as a reference."""


class BranchInUse(SproutError):
    """The operation is not allowed on the active branch."""
