"""Command line: print F(n) mod m and how long each strategy took.

    fibo N M [--strategy NAME ...] [--type KIND]
    fibo --bench [--bench-scale K]
"""

import argparse
import logging
import sys

from fibo.bench import BenchCollector, DEFAULT_INDICES, DEFAULT_MODULUS, format_measurement
from fibo.fibonacci import RECURSIVE_CEILING, Strategy
from fibo.integers import INDEX_TYPES, parse_index

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='fibo', description="Fibonacci numbers modulo m")
    parser.add_argument('n', nargs='?', help="Index n (negative allowed for signed types)")
    parser.add_argument('m', nargs='?', help="Modulus m (non-zero)")
    parser.add_argument('-s', '--strategy', action='append', dest='strategies',
                        metavar='NAME',
                        help="Strategy to run, repeatable (default: all). "
                             f"One of: {', '.join(s.value for s in Strategy)}")
    parser.add_argument('-t', '--type', dest='kind', default='int',
                        choices=sorted(INDEX_TYPES),
                        help="Integer representation for n and m (default: int)")
    parser.add_argument('--force', action='store_true',
                        help=f"Run the recursive strategy even for n > {RECURSIVE_CEILING}")
    parser.add_argument('--bench', action='store_true',
                        help=f"Run every strategy at its default index, m={DEFAULT_MODULUS}")
    parser.add_argument('--bench-scale', type=int, default=1, metavar='K',
                        help="Divide the linear-time bench indices by K")
    parser.add_argument('-v', '--verbose', action='count', default=0,
                        help="-v for info, -vv for debug logging")
    return parser


def _configure_logging(verbose: int):
    level = logging.WARNING
    if verbose == 1:
        level = logging.INFO
    elif verbose >= 2:
        level = logging.DEBUG
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")


def _select(parser, names) -> list:
    if not names:
        return list(Strategy)
    try:
        return [Strategy.from_name(name) for name in names]
    except ValueError as e:
        parser.error(str(e))


def _too_deep(strategy: Strategy, n, force: bool) -> bool:
    if strategy is not Strategy.RECURSIVE or force:
        return False
    return abs(int(n)) > RECURSIVE_CEILING


def run_bench(strategies: list, scale: int = 1, out=None) -> BenchCollector:
    """Run each strategy at its default index and print one line per run."""
    out = out or sys.stdout
    collector = BenchCollector()
    for strategy in strategies:
        n = DEFAULT_INDICES[strategy]
        if not strategy.logarithmic and strategy is not Strategy.RECURSIVE:
            n = max(n // max(scale, 1), 1)
        logger.info("bench %s n=%d", strategy.value, n)
        r = collector.run(strategy, n, DEFAULT_MODULUS)
        print(format_measurement(r), file=out)
    return collector


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    _configure_logging(args.verbose)
    strategies = _select(parser, args.strategies)

    if args.bench:
        run_bench(strategies, args.bench_scale)
        return 0

    if args.n is None or args.m is None:
        parser.print_usage()
        return 0

    try:
        n = parse_index(args.n, args.kind)
        m = parse_index(args.m, args.kind)
    except (ValueError, OverflowError) as e:
        parser.error(str(e))
    if m == 0:
        parser.error("modulus must be non-zero")
    if m < 0:
        parser.error(f"modulus must be positive, got {m}")

    collector = BenchCollector()
    for strategy in strategies:
        if _too_deep(strategy, n, args.force):
            logger.warning("skipping %s: n=%s is above %d (use --force)",
                           strategy.value, n, RECURSIVE_CEILING)
            continue
        try:
            r = collector.run(strategy, n, m)
        except OverflowError as e:
            parser.error(f"{strategy.value}: {e}")
        print(format_measurement(r))
    return 0


if __name__ == '__main__':
    sys.exit(main())
