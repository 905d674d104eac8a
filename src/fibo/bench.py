"""Wall-clock timing of the Fibonacci strategies."""

import logging
import time
from contextlib import contextmanager
from dataclasses import dataclass

from fibo.fibonacci import Strategy, fibonacci

logger = logging.getLogger(__name__)

DEFAULT_MODULUS = 1_000_000_000

# Largest index each strategy finishes in reasonable time.
DEFAULT_INDICES = {
    Strategy.RECURSIVE: 35,
    Strategy.SEQUENTIAL: 10_000_000,
    Strategy.MATRIX_SEQUENTIAL: 10_000_000,
    Strategy.MATRIX_POW_RECURSIVE: (1 << 64) - 1,
    Strategy.MATRIX_POW_ITERATIVE: (1 << 64) - 1,
}


@dataclass
class Measurement:
    label: str
    n: object
    m: object
    value: object = None
    time_s: float = 0.0

    @property
    def elapsed_ms(self) -> int:
        return int(self.time_s * 1000)


def format_measurement(m: Measurement) -> str:
    """One line: label, n, F(n)%m and elapsed milliseconds."""
    return (f"{m.label:<10}: n={str(m.n):>20}, "
            f"F(n)%{m.m}={str(m.value):>9} ({m.elapsed_ms:>3}ms)")


class BenchCollector:
    """Times strategy runs and keeps the measurements."""

    def __init__(self):
        self.measurements: list[Measurement] = []

    @contextmanager
    def measure(self, label: str, n, m):
        """Context manager timing a block.

        Usage:
            with collector.measure('Sequential', n, m) as r:
                r.value = sequential(n, m)
            # r.time_s now contains elapsed time
        """
        r = Measurement(label=label, n=n, m=m)
        start_time = time.perf_counter()
        try:
            yield r
        finally:
            r.time_s = time.perf_counter() - start_time
            self.measurements.append(r)
            logger.debug("%s n=%s m=%s took %.6fs", label, n, m, r.time_s)

    def run(self, strategy: Strategy, n, m) -> Measurement:
        """Time fibonacci(n, m, strategy)."""
        with self.measure(strategy.label, n, m) as r:
            r.value = fibonacci(n, m, strategy)
        return r

    def summary(self) -> dict:
        """Run count, total time and fastest time per label."""
        if not self.measurements:
            return {}
        fastest = {}
        for r in self.measurements:
            if r.label not in fastest or r.time_s < fastest[r.label]:
                fastest[r.label] = r.time_s
        return {
            'count': len(self.measurements),
            'total_time': sum(r.time_s for r in self.measurements),
            'fastest': fastest,
        }
