"""2x2 matrices modulo m and their exponentiation by repeated squaring.

A matrix is the immutable pair of rows ((a, b), (c, d)):

    | a b |
    | c d |

Entries are EuclideanDomain elements and every product is reduced modulo m.
The exponent is any Exponent value and need not share the entries' type: a
U64 exponent can drive a matrix over U32 entries.

Q_MATRIX ** n == ((F(n-1), F(n)), (F(n), F(n+1))), so the top-right entry of
Q^n mod m is F(n) mod m.
"""

from typing import NamedTuple

from fibo.algebra import zero, one, is_zero, is_odd, halve, widen, rewrap


class Matrix(NamedTuple):
    top: tuple
    bottom: tuple

    @property
    def top_right(self):
        return self.top[1]

    def mul(self, other, m) -> 'Matrix':
        """self * other mod m."""
        return multiply(self, other, m)

    def pow(self, n, m) -> 'Matrix':
        """self ** n mod m (iterative squaring)."""
        return power_iterative(self, n, m)


def identity(like) -> Matrix:
    """Identity matrix over like's type."""
    o, z = one(like), zero(like)
    return Matrix((o, z), (z, o))


def q_matrix(like) -> Matrix:
    """Fibonacci Q-matrix ((0, 1), (1, 1)) over like's type."""
    o, z = one(like), zero(like)
    return Matrix((z, o), (o, o))


def zero_matrix(like) -> Matrix:
    z = zero(like)
    return Matrix((z, z), (z, z))


IDENTITY = identity(0)
Q_MATRIX = q_matrix(0)
ZERO = zero_matrix(0)


def multiply(x, y, m) -> Matrix:
    """Matrix product x * y with each entry reduced modulo m.

    Entries are multiplied at full precision (fibo.algebra.widen) and only
    the reduced result is stored back in m's type, so a fixed-width modulus
    may use the whole width.
    """
    (a, b), (c, d) = [[widen(v) for v in row] for row in x]
    (e, f), (g, h) = [[widen(v) for v in row] for row in y]
    k = widen(m)
    return Matrix(
        (rewrap(m, (a * e + b * g) % k), rewrap(m, (a * f + b * h) % k)),
        (rewrap(m, (c * e + d * g) % k), rewrap(m, (c * f + d * h) % k)),
    )


def _check_exponent(n):
    if n < zero(n):
        raise ValueError(f"Exponent must be non-negative, got {n}")


def power_recursive(x, n, m) -> Matrix:
    """x ** n mod m by top-down halving.

    Recursion depth equals the bit length of n, so exponents past the
    interpreter's recursion limit (about 2**900 by default) need
    power_iterative instead.
    """
    _check_exponent(n)
    return _power_recursive(x, n, m)


def _power_recursive(x, n, m) -> Matrix:
    if is_zero(n):
        return identity(m)
    y = _power_recursive(x, halve(n), m)
    y = multiply(y, y, m)
    if is_odd(n):
        y = multiply(y, x, m)
    return y


def power_iterative(x, n, m) -> Matrix:
    """x ** n mod m walking the bits of n from least significant upward.

    z accumulates the product, y holds x^(2^i) for the current bit i.
    Gives the same result as power_recursive for every valid input.
    """
    _check_exponent(n)
    z = identity(m)
    y = Matrix(*x)
    while not is_zero(n):
        if is_odd(n):
            z = multiply(z, y, m)
        y = multiply(y, y, m)
        n = halve(n)
    return z
