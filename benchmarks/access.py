#!/usr/bin/env python3
from __future__ import annotations

import argparse
import statistics
import sys
import time
from pathlib import Path
from typing import Callable

sys.path.insert(0, str(Path(__file__).resolve().parents[1] / "python"))

from access_proxy import AccessProxy  # noqa: E402


class _Subject:
    def __init__(self) -> None:
        self.public = 1
        self.__private = 2

    def __method(self, value):
        return value


def _run_once(op: Callable[[], object], loops: int) -> float:
    start = time.perf_counter()
    for _ in range(loops):
        op()
    end = time.perf_counter()
    return (end - start) * 1e9 / loops


def _cases() -> dict[str, Callable[[], object]]:
    subject = _Subject()
    proxy = AccessProxy(subject)
    return {
        "direct-getattr": lambda: subject.public,
        "direct-mangled": lambda: subject._Subject__private,
        "proxy-public": lambda: proxy.public,
        "proxy-private": lambda: proxy.private,
        "proxy-get-value": lambda: proxy.get_value("__private"),
        "proxy-call": lambda: proxy.call("method", 1),
        "proxy-rebind": lambda: proxy.set_object(subject),
    }


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        description="Benchmark proxied member access against direct attribute access.",
    )
    parser.add_argument("--iterations", type=int, default=30)
    parser.add_argument("--warmup", type=int, default=5)
    parser.add_argument("--loops", type=int, default=10000)
    parser.add_argument(
        "case",
        nargs="*",
        help="Cases to run; default: all",
    )
    args = parser.parse_args(argv)

    if args.iterations <= 0:
        parser.error("--iterations must be positive")
    if args.warmup < 0:
        parser.error("--warmup cannot be negative")
    if args.loops <= 0:
        parser.error("--loops must be positive")

    cases = _cases()
    selected = args.case or list(cases)
    unknown = [name for name in selected if name not in cases]
    if unknown:
        parser.error(f"unknown case: {', '.join(unknown)}")

    print(f"warmup: {args.warmup} iterations: {args.iterations} loops: {args.loops}")
    for name in selected:
        op = cases[name]
        for _ in range(args.warmup):
            _run_once(op, args.loops)

        samples: list[float] = []
        for _ in range(args.iterations):
            samples.append(_run_once(op, args.loops))

        samples.sort()
        mean = statistics.fmean(samples)
        median = statistics.median(samples)
        if len(samples) > 1:
            p95 = statistics.quantiles(samples, n=20, method="inclusive")[-1]
        else:
            p95 = samples[0]
        stdev = statistics.pstdev(samples)
        print(
            f"{name}: mean {mean:.1f} ns  median {median:.1f} ns  "
            f"p95 {p95:.1f} ns  stdev {stdev:.1f} ns"
        )
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
