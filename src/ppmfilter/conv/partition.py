"""Row partitioning across worker threads."""

from typing import NamedTuple


class RowRange(NamedTuple):
    """Half-open row interval [start, end) owned by one worker."""

    start: int
    end: int

    @property
    def size(self) -> int:
        return max(0, self.end - self.start)


def row_range(thread_id: int, num_threads: int, height: int) -> RowRange:
    """Compute the rows assigned to one worker.

    Args:
        thread_id (int): Worker index in [0, num_threads).
        num_threads (int): Number of workers, values below 1 count as 1.
        height (int): Number of image rows.

    Returns:
        RowRange: floor(id*height/n) to floor((id+1)*height/n).
    """
    num_threads = max(1, num_threads)
    if not 0 <= thread_id < num_threads:
        raise ValueError(f"thread_id {thread_id} out of range for {num_threads} threads")
    start = (thread_id * height) // num_threads
    end = ((thread_id + 1) * height) // num_threads
    return RowRange(start, end)


def partition_rows(height: int, num_threads: int) -> list[RowRange]:
    """Split [0, height) into one contiguous range per worker."""
    num_threads = max(1, num_threads)
    return [row_range(i, num_threads, height) for i in range(num_threads)]
