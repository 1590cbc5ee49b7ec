"""Engine configuration."""

from dataclasses import dataclass
from enum import Enum

DEFAULT_MAX_DIFFS_PER_COLUMN = 200_000


class DuplicateKeyPolicy(str, Enum):
    """Which row a key index keeps when a key value repeats within a table."""

    LAST = "last"
    FIRST = "first"


def validate_max_diffs(max_diffs_per_column: int) -> int:
    """Check the per-column mismatch cap.

    Raises:
        ValueError: If the cap is not an integer >= 0
    """
    if isinstance(max_diffs_per_column, bool) or not isinstance(max_diffs_per_column, int):
        raise ValueError(
            f"max_diffs_per_column must be an integer, got {max_diffs_per_column!r}"
        )
    if max_diffs_per_column < 0:
        raise ValueError(f"max_diffs_per_column must be >= 0, got {max_diffs_per_column}")
    return max_diffs_per_column


@dataclass(frozen=True)
class CompareConfig:
    """Options controlling a comparison.

    Attributes:
        max_diffs_per_column: Maximum mismatches retained per column; further
            mismatches are counted as suppressed
        duplicate_keys: Policy for repeated key values (default: last row wins)
    """

    max_diffs_per_column: int = DEFAULT_MAX_DIFFS_PER_COLUMN
    duplicate_keys: DuplicateKeyPolicy = DuplicateKeyPolicy.LAST

    def __post_init__(self):
        validate_max_diffs(self.max_diffs_per_column)
        # Accept plain strings such as "first" from the CLI
        object.__setattr__(self, "duplicate_keys", DuplicateKeyPolicy(self.duplicate_keys))
