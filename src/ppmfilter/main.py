"""Command-line entry points for the sequential and threaded filters."""

import argparse
import logging
import sys
import time
from typing import Callable, Optional, Sequence

from ppmfilter import config
from ppmfilter.conv.kernels import available_kernels, get_kernel
from ppmfilter.conv.standard import Standard
from ppmfilter.conv.threaded import Threaded
from ppmfilter.pixmap.errors import PixmapError
from ppmfilter.pixmap.image import Image
from ppmfilter.pixmap.service import decode, encode

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_FAILURE = 1


class _Parser(argparse.ArgumentParser):
    """Argument parser that exits with status 1 on bad arguments."""

    def error(self, message: str) -> None:
        self.print_usage(sys.stderr)
        self.exit(EXIT_FAILURE, f"{self.prog}: error: {message}\n")


def _add_common(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("input", help="P6 image to read")
    parser.add_argument("output", help="P6 image to write")
    parser.add_argument(
        "--log-level",
        default=config.LOG_LEVEL,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        type=str.upper,
    )


def _add_threaded(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("threads", type=int, help="worker threads, values <= 0 mean 1")
    parser.add_argument(
        "--kernel",
        default=config.DEFAULT_KERNEL,
        help=f"one of {', '.join(available_kernels())}; unknown names copy the image",
    )


def filter_file(input_path: str, output_path: str, apply: Callable[[Image], Image]) -> int:
    """Decode, filter and encode one image, returning the process exit code."""
    try:
        image = decode(input_path)
    except PixmapError as err:
        logger.error("%s", err)
        return EXIT_FAILURE

    start_time = time.perf_counter()
    result = apply(image)
    elapsed = time.perf_counter() - start_time
    print(f"Filter took {elapsed:.6f} seconds.")

    try:
        encode(result, output_path)
    except PixmapError as err:
        logger.error("%s", err)
        return EXIT_FAILURE

    print(f"Image saved to '{output_path}'")
    return EXIT_OK


def run_sequential(args: argparse.Namespace) -> int:
    return filter_file(args.input, args.output, Standard().run)


def run_threaded(args: argparse.Namespace) -> int:
    num_threads = max(1, args.threads)
    kernel = get_kernel(args.kernel)
    if kernel.is_identity:
        logger.warning("Unknown kernel %r, output will be a copy of the input", args.kernel)
    threaded_conv = Threaded(kernel)
    return filter_file(args.input, args.output, lambda image: threaded_conv.run(image, num_threads=num_threads))


def build_parser() -> argparse.ArgumentParser:
    parser = _Parser(prog="ppmfilter", description="3x3 convolution filters for P6 images.")
    commands = parser.add_subparsers(dest="command", required=True)

    seq = commands.add_parser("seq", help="single-threaded grayscale edge detection")
    _add_common(seq)
    seq.set_defaults(handler=run_sequential)

    conc = commands.add_parser("conc", help="multi-threaded per-channel convolution")
    _add_common(conc)
    _add_threaded(conc)
    conc.set_defaults(handler=run_threaded)
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    config.setup_logging(args.log_level)
    return args.handler(args)


def sequential(argv: Optional[Sequence[str]] = None) -> int:
    """Entry point for ppmfilter-seq INPUT OUTPUT."""
    argv = sys.argv[1:] if argv is None else argv
    return main(["seq", *argv])


def threaded(argv: Optional[Sequence[str]] = None) -> int:
    """Entry point for ppmfilter-conc INPUT OUTPUT THREADS."""
    argv = sys.argv[1:] if argv is None else argv
    return main(["conc", *argv])


if __name__ == "__main__":
    sys.exit(main())
