"""
Helpers for processing lists in fixed-size batches.
"""

from typing import Iterator, Sequence, TypeVar

T = TypeVar("T")


def chunked(items: Sequence[T], size: int) -> Iterator[list[T]]:
    """
    Split items into consecutive chunks of `size`.

    The last chunk may be shorter. Yields nothing for an empty sequence.

    Raises:
        ValueError: If size is not positive
    """
    if size <= 0:
        raise ValueError(f"Chunk size must be positive, got {size}")

    for start in range(0, len(items), size):
        yield list(items[start:start + size])
