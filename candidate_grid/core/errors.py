"""Error types raised by the grid engine.

All of them subclass ValueError so callers that already handle bad input
(CLI argument parsing, config loading) catch them without special cases.
"""


class GridError(ValueError):
    """Base class for engine errors."""


class UnknownColumnError(GridError):
    """A column key that is not in the schema registry."""

    def __init__(self, key: str) -> None:
        self.key = key
        super().__init__(f"Unknown column '{key}'")


class RecordNotFoundError(GridError):
    """No record with the requested identity exists in the collection."""

    def __init__(self, record_id: str) -> None:
        self.record_id = record_id
        super().__init__(f"Record '{record_id}' not found")


class RankConflictError(GridError):
    """A rank update was rejected: the rank is not positive or already taken.

    ``holder_id`` is the identity currently holding the rank, or None when the
    rank was rejected for not being a positive integer.
    """

    def __init__(self, rank: object, holder_id: str | None = None) -> None:
        self.rank = rank
        self.holder_id = holder_id
        if holder_id is None:
            msg = f"Rank must be a positive integer, got {rank!r}"
        else:
            msg = f"Rank {rank} is already held by record '{holder_id}'"
        super().__init__(msg)
