"""Module for the row-partitioned multi-threaded convolution pipeline."""

import logging
import threading
import time
from dataclasses import dataclass

import numpy as np

from ppmfilter.conv.abstract import Conv2D
from ppmfilter.conv.border import BorderPolicy
from ppmfilter.conv.kernels import EDGE_DETECT, Kernel
from ppmfilter.conv.partition import RowRange, partition_rows
from ppmfilter.pixmap.image import Image

logger = logging.getLogger(__name__)


class ThreadCreationError(RuntimeError):
    """A worker thread could not be started."""

    def __init__(self, thread_id: int, rows: RowRange, cause: BaseException) -> None:
        super().__init__(f"Could not start worker {thread_id} for rows {rows.start}-{rows.end}: {cause}")
        self.thread_id = thread_id
        self.rows = rows


@dataclass(frozen=True)
class FilterPass:
    """Read-only state shared by every worker of one convolution pass.

    source is the padded input widened to int32, target is the output
    buffer. Each worker writes only the target rows it was assigned.
    """

    source: np.ndarray
    target: np.ndarray
    width: int
    height: int
    kernel: Kernel


def _truncating_divide(values: np.ndarray, divisor: int) -> np.ndarray:
    """Integer division rounding toward zero."""
    quotient = np.abs(values) // abs(divisor)
    return np.where((values < 0) != (divisor < 0), -quotient, quotient)


class Threaded(Conv2D):
    """Per-channel convolution executed by one thread per row range."""

    def __init__(self, kernel: Kernel = EDGE_DETECT) -> None:
        super().__init__(kernel, BorderPolicy.SKIP)

    def build_pass(self, image: Image, output: Image) -> FilterPass:
        """Create the shared state for one pass over image into output.

        The largest possible sum is 255 * 9, so int32 is wide enough.
        """
        return FilterPass(
            source=self.pad(image.pixels.astype(np.int32)),
            target=output.pixels,
            width=image.width,
            height=image.height,
            kernel=self.kernel,
        )

    def process_rows(self, context: FilterPass, rows: RowRange) -> None:
        """Compute the output rows in the given range.

        Args:
            context (FilterPass): Shared pass state.
            rows (RowRange): Rows owned by the caller.
        """
        if rows.size == 0:
            return
        if context.kernel.is_identity:
            # Strip the one-pixel padding to get the original pixels back.
            context.target[rows.start:rows.end] = context.source[rows.start + 1:rows.end + 1, 1:context.width + 1]
            return

        sums = self.convolve_rows(context.source, rows)
        if context.kernel.normalizes:
            sums = _truncating_divide(sums, context.kernel.divisor)
        context.target[rows.start:rows.end] = np.clip(sums, 0, 255)

    def run(self, image: Image, num_threads: int = 1) -> Image:
        """Run convolution operation on the given image.

        Args:
            image (Image): Image to apply convolution on.
            num_threads (int): Number of threads to use, at least 1.

        Returns:
            Image: Convolved image.
        """
        num_threads = max(1, num_threads)
        output = Image.blank(image.width, image.height)
        context = self.build_pass(image, output)
        ranges = partition_rows(image.height, num_threads)

        start_time = time.perf_counter()

        threads = []
        unclaimed = []
        errors: list = [None] * len(ranges)

        def work(slot: int, rows: RowRange) -> None:
            try:
                self.process_rows(context, rows)
            except Exception as err:
                errors[slot] = err

        for thread_id, rows in enumerate(ranges):
            worker = threading.Thread(
                target=work,
                args=(thread_id, rows),
                name=f"conv-worker-{thread_id}",
            )
            try:
                worker.start()
            except RuntimeError as err:
                failure = ThreadCreationError(thread_id, rows, err)
                logger.warning("%s; continuing with %d started worker(s)", failure, len(threads))
                unclaimed = ranges[thread_id:]
                break
            threads.append(worker)

        for worker in threads:
            worker.join()

        for err in errors:
            if err is not None:
                logger.error("Worker failed, discarding the output: %s", err)
                raise err

        # Rows whose worker never started are computed here so the output is complete.
        for rows in unclaimed:
            self.process_rows(context, rows)

        elapsed = time.perf_counter() - start_time
        logger.info(
            "Threaded convolution (%s, %d threads) took %.6f seconds",
            self.kernel.name,
            len(threads),
            elapsed,
        )
        return output
