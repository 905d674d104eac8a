"""F(n) mod m by four strategies, and their extension to negative n.

  recursive             naive, exponential time
  sequential            running pair (a, b), linear time
  matrix_sequential     Q multiplied in n times, linear time
  matrix_pow_recursive  Q^n by top-down squaring, O(log n)
  matrix_pow_iterative  Q^n by bottom-up squaring, O(log n)

Results carry the modulus's type. Negative indices go through extended(),
which applies F(-n) = (-1)^(n+1) * F(n).
"""

import functools
from enum import Enum

from fibo.algebra import zero, one, is_zero, is_one, is_odd, negate, add_mod
from fibo.matrix import identity, q_matrix, multiply, power_recursive, power_iterative

RECURSIVE_CEILING = 40  # past this the naive strategy takes minutes


def recursive(n, m):
    """F(n) mod m by the defining recurrence, recomputing every subproblem."""
    if is_zero(n):
        return zero(m)
    if is_one(n):
        return one(m) % m
    return add_mod(recursive(n - 2, m), recursive(n - 1, m), m)


def sequential(n, m):
    """F(n) mod m by stepping (F(k), F(k+1)) forward n times."""
    a, b = zero(m), one(m) % m
    for _ in range(n):
        a, b = b, add_mod(a, b, m)
    return a


def matrix_sequential(n, m):
    """F(n) mod m as the top-right of I * Q * ... * Q (n factors)."""
    q = q_matrix(m)
    t = identity(m)
    for _ in range(n):
        t = multiply(t, q, m)
    return t.top_right


def matrix_pow_recursive(n, m):
    return power_recursive(q_matrix(m), n, m).top_right


def matrix_pow_iterative(n, m):
    return power_iterative(q_matrix(m), n, m).top_right


def extended(strategy):
    """Extend a non-negative strategy to all integer n.

    F(-k) = F(k) for odd k and -F(k) for even k. The negation is plain,
    not reduced: the result is congruent to F(-k) mod m and may be negative.
    """
    @functools.wraps(strategy)
    def wrapper(n, m):
        if n >= zero(n):
            return strategy(n, m)
        k = negate(n)
        r = strategy(k, m)
        return r if is_odd(k) else negate(r)

    wrapper.__name__ = f"extended_{strategy.__name__}"
    wrapper.__qualname__ = wrapper.__name__
    return wrapper


extended_recursive = extended(recursive)
extended_sequential = extended(sequential)
extended_matrix_sequential = extended(matrix_sequential)
extended_matrix_pow_recursive = extended(matrix_pow_recursive)
extended_matrix_pow_iterative = extended(matrix_pow_iterative)


class Strategy(Enum):
    RECURSIVE = 'recursive'
    SEQUENTIAL = 'sequential'
    MATRIX_SEQUENTIAL = 'matrix_sequential'
    MATRIX_POW_RECURSIVE = 'matrix_pow_recursive'
    MATRIX_POW_ITERATIVE = 'matrix_pow_iterative'

    @property
    def label(self) -> str:
        """Short name shown by the command line."""
        return _LABELS[self]

    @property
    def function(self):
        """The negative-index-aware implementation."""
        return _IMPLEMENTATIONS[self]

    @property
    def logarithmic(self) -> bool:
        return self in (Strategy.MATRIX_POW_RECURSIVE,
                        Strategy.MATRIX_POW_ITERATIVE)

    @classmethod
    def from_name(cls, name: str) -> 'Strategy':
        """Look up a strategy by value ("matrix_pow_iterative") or
        member name, ignoring case and treating '-' as '_'."""
        key = name.strip().lower().replace('-', '_')
        for s in cls:
            if key in (s.value, s.name.lower()):
                return s
        raise ValueError(
            f"Unknown strategy {name!r}, expected one of "
            f"{', '.join(s.value for s in cls)}")


_LABELS = {
    Strategy.RECURSIVE: 'Recursive',
    Strategy.SEQUENTIAL: 'Sequential',
    Strategy.MATRIX_SEQUENTIAL: 'Matrix',
    Strategy.MATRIX_POW_RECURSIVE: 'Mat (rec)',
    Strategy.MATRIX_POW_ITERATIVE: 'Mat (loop)',
}

_IMPLEMENTATIONS = {
    Strategy.RECURSIVE: extended_recursive,
    Strategy.SEQUENTIAL: extended_sequential,
    Strategy.MATRIX_SEQUENTIAL: extended_matrix_sequential,
    Strategy.MATRIX_POW_RECURSIVE: extended_matrix_pow_recursive,
    Strategy.MATRIX_POW_ITERATIVE: extended_matrix_pow_iterative,
}


def fibonacci(n, m, strategy=Strategy.MATRIX_POW_ITERATIVE):
    """F(n) mod m for any integer n, using the chosen strategy.

    `strategy` is a Strategy or its name. m must be non-zero; a zero
    modulus raises ZeroDivisionError at the first reduction.
    """
    if not isinstance(strategy, Strategy):
        strategy = Strategy.from_name(strategy)
    return strategy.function(n, m)
