"""Command-line demo of pulsebar progress bars."""

import argparse
import logging
import random
import sys
import threading
import time

import tracerite

from pulsebar.animation import ANIMATIONS, get_animation, rainbow_animation, solid_block_animation
from pulsebar.bar import DEFAULT_WIDTH, PulseBar
from pulsebar.colors import Color, enable_ansi
from pulsebar.frame import gradient_blend
from pulsebar.registry import LineRegistry
from pulsebar.utils import parse_duration

tracerite.load()

__all__ = ["main"]

DEFAULT_DELAY = "20ms"


def _animation(args, fallback=None):
    if args.animation:
        return get_animation(args.animation)
    return fallback


def demo_basic(args, registry: LineRegistry):
    with PulseBar(
        100,
        args.width,
        "Downloading",
        animation=_animation(args, solid_block_animation),
        registry=registry,
        leave=True,
    ) as bar:
        for i in range(0, 101, 2):
            bar.update(i)
            time.sleep(args.delay * 2)
        bar.complete()


def demo_style(args, registry: LineRegistry):
    """Custom animation, split colors and brackets that change with progress."""

    def brackets(percent):
        if percent < 30:
            return "<<", ">>"
        if percent < 70:
            return "{", "}"
        return "⟪", "⟫"

    def halves(cell, width, percent):
        return Color.BRIGHT_BLUE if cell < width // 2 else Color.BRIGHT_RED

    with PulseBar(
        100,
        args.width,
        "Processing",
        Color.BRIGHT_YELLOW,
        animation=_animation(args, rainbow_animation),
        registry=registry,
        leave=True,
    ) as bar:
        bar.set_color_blend_callback(halves)
        bar.set_bracket_callback(brackets)
        for i in range(101):
            bar.update(i)
            time.sleep(args.delay * 1.5)
        bar.complete()

    with PulseBar(
        100, args.width, "Gradient", animation=_animation(args), registry=registry, leave=True
    ) as bar:
        bar.set_color_blend_callback(gradient_blend("#00c6ff", "#f7797d"))
        for i in range(101):
            bar.update(i)
            time.sleep(args.delay)
        bar.complete()


def demo_nested(args, registry: LineRegistry):
    """An overall bar above one bar per item."""
    num_items = 5
    overall = PulseBar(
        num_items, max(10, args.width - 20), "Overall", animation=_animation(args),
        registry=registry, leave=True,
    )
    with overall:
        for item in range(num_items):
            with PulseBar(
                100, max(10, args.width - 10), f"Item {item + 1}",
                animation=_animation(args), registry=registry, leave=True,
            ) as bar:
                i = 0
                while i < 100:
                    i += random.randint(1, 5)
                    bar.update(i)
                    time.sleep(args.delay)
                bar.complete()
            overall.update(item + 1)
        overall.complete()


def demo_threads(args, registry: LineRegistry):
    """One bar per worker thread, all updating concurrently."""
    total_work = 100
    bars = [
        PulseBar(
            total_work, max(10, args.width - 10), f"Worker {n + 1}", Color.BRIGHT_BLUE,
            animation=_animation(args), registry=registry, leave=True,
        )
        for n in range(args.workers)
    ]

    def work(bar: PulseBar, delay: float):
        try:
            for i in range(total_work + 1):
                bar.update(i)
                time.sleep(delay)
            bar.complete()
        except Exception as e:
            logging.exception("Worker thread exception: %s", e)

    threads = [
        threading.Thread(target=work, args=(bar, args.delay * random.uniform(1, 2.5)))
        for bar in bars
    ]
    for t in threads:
        t.start()
    for t in threads:
        t.join()
    for bar in bars:
        bar.close()


def demo_label(args, registry: LineRegistry):
    with PulseBar(
        100, args.width, "Starting", animation=_animation(args), registry=registry, leave=True
    ) as bar:
        for i in range(101):
            if i == 20:
                bar.set_label("Loading config")
            elif i == 60:
                bar.set_label("Processing data")
            bar.update(i)
            time.sleep(args.delay)
        bar.set_label("Done")
        bar.complete()


def demo_millis(args, registry: LineRegistry):
    with PulseBar(
        100, args.width, "Timing", animation=_animation(args), registry=registry, leave=True
    ) as bar:
        bar.set_time_format(args.time_format or "%S.%3N")
        bar.set_time_color(Color.BRIGHT_YELLOW)
        for i in range(101):
            bar.update(i)
            time.sleep(args.delay)
        bar.complete()


DEMOS = {
    "basic": ("Basic usage", demo_basic),
    "style": ("Custom style", demo_style),
    "nested": ("Nested bars", demo_nested),
    "threads": ("Multithreaded", demo_threads),
    "label": ("Dynamic label", demo_label),
    "millis": ("Millisecond time format", demo_millis),
}


def run_demos(names, args, registry: LineRegistry):
    for name in names:
        title, demo = DEMOS[name]
        registry.write_line(f"\x1b[1m=== {title} ===\x1b[0m")
        demo(args, registry)
        registry.newline()


def _main(argv=None):
    """Internal main function that may raise exceptions."""
    parser = argparse.ArgumentParser(description="Show pulsebar progress bar demos")
    parser.add_argument(
        "demos",
        nargs="*",
        metavar="DEMO",
        help=f"Demos to run: {', '.join(DEMOS)} (default: all)",
    )
    parser.add_argument(
        "-d",
        "--delay",
        help=f"Base delay between updates (e.g. 20ms, 0.1s; default: {DEFAULT_DELAY})",
        type=str,
        default=DEFAULT_DELAY,
    )
    parser.add_argument(
        "-w",
        "--workers",
        help="Number of worker threads in the threads demo",
        type=int,
        default=4,
    )
    parser.add_argument(
        "--width",
        help=f"Bar width in cells (default: {DEFAULT_WIDTH})",
        type=int,
        default=DEFAULT_WIDTH,
    )
    parser.add_argument(
        "-a",
        "--animation",
        help=f"Frontier animation for all bars: {', '.join(ANIMATIONS)}",
        type=str,
        default=None,
    )
    parser.add_argument(
        "--time-format",
        help="Time template for the millis demo, %%S = seconds, %%3N = milliseconds",
        type=str,
        default=None,
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Verbose mode: log row allocation to stderr",
    )

    args = parser.parse_args(argv)

    # Validate and process args
    args.delay = parse_duration(args.delay)
    if args.animation:
        get_animation(args.animation)
    if args.workers < 1:
        raise ValueError("Need at least one worker")
    if args.width < 10:
        raise ValueError("Width must be at least 10 cells")
    names = args.demos or list(DEMOS)
    unknown = [name for name in names if name not in DEMOS]
    if unknown:
        raise ValueError(f"Unknown demo: {', '.join(unknown)}")

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, stream=sys.stderr)

    enable_ansi()
    start_time = time.perf_counter()
    with LineRegistry() as registry:
        run_demos(names, args, registry)
    elapsed = time.perf_counter() - start_time
    print(f"All demos completed in {elapsed:.1f}s", file=sys.stderr)


def main(argv=None):
    """Main entry point for the CLI with exception handling."""
    try:
        _main(argv)
    except (KeyboardInterrupt, BrokenPipeError):
        sys.exit(1)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)
