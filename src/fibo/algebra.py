"""Algebraic capability sets for modular arithmetic and repeated squaring.

A type takes part in the matrix engine by conforming to these sets, either by
subclassing or by a direct conformance declaration (`Ring.register(int)`).
Nothing here checks the algebraic laws. Associativity, identities and
distributivity are the implementing type's obligation.

Two independent roles:
  - EuclideanDomain: what is multiplied (matrix entries, the modulus).
  - Exponent: how many times (walked bit by bit, least significant first).
"""

from abc import ABC, abstractmethod
from functools import singledispatch


class AdditiveGroup(ABC):
    """zero, is_zero, + and -."""

    @abstractmethod
    def zero(self): ...

    @abstractmethod
    def is_zero(self) -> bool: ...

    @abstractmethod
    def __add__(self, other): ...

    @abstractmethod
    def __sub__(self, other): ...


class MultiplicativeGroup(ABC):
    """one, is_one and *."""

    @abstractmethod
    def one(self): ...

    @abstractmethod
    def is_one(self) -> bool: ...

    @abstractmethod
    def __mul__(self, other): ...


class Ring(AdditiveGroup, MultiplicativeGroup):
    pass


class EuclideanDomain(Ring):
    """Ring + remainder + equality: enough for arithmetic modulo m."""

    @abstractmethod
    def __mod__(self, other): ...

    @abstractmethod
    def __eq__(self, other): ...


class Exponent(ABC):
    """zero/one + bitwise AND + right shift + equality."""

    @abstractmethod
    def zero(self): ...

    @abstractmethod
    def one(self): ...

    @abstractmethod
    def __and__(self, other): ...

    @abstractmethod
    def __rshift__(self, shift): ...

    @abstractmethod
    def __eq__(self, other): ...


# Python int is the arbitrary-precision signed integer.
EuclideanDomain.register(int)
Exponent.register(int)


@singledispatch
def zero(x):
    """Additive identity of x's type."""
    return x.zero()


@zero.register
def _(x: int):
    return 0


@singledispatch
def one(x):
    """Multiplicative identity of x's type."""
    return x.one()


@one.register
def _(x: int):
    return 1


def is_zero(x) -> bool:
    return x == zero(x)


def is_one(x) -> bool:
    return x == one(x)


def negate(x):
    """Additive inverse: zero - x."""
    return zero(x) - x


def is_odd(n) -> bool:
    """Lowest binary digit of an exponent."""
    return (n & one(n)) != zero(n)


def halve(n):
    return n >> 1


def bits(n):
    """Yield the binary digits of n, least significant first.

    n must be non-negative; a negative int never reaches zero under >>.
    """
    while not is_zero(n):
        yield is_odd(n)
        n = halve(n)


def conforms(x, capability) -> bool:
    """True if x's type is declared to provide `capability`."""
    return isinstance(x, capability)


@singledispatch
def widen(x):
    """x in a representation where +, * and % cannot overflow.

    Types without a width limit are returned unchanged.
    """
    return x


@singledispatch
def rewrap(like, v):
    """Bring a widened value back into like's representation."""
    return v


def add_mod(a, b, m):
    """(a + b) % m, summed at full precision and returned in m's type."""
    return rewrap(m, (widen(a) + widen(b)) % widen(m))
