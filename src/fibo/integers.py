"""Concrete integer representations for the matrix engine.

Python int already is the arbitrary-precision signed integer and is
registered with the capability sets in fibo.algebra. FixedInt adds the other
representations: fixed-width machine words and the arbitrary-precision
unsigned Natural.

Arithmetic is checked: a result that does not fit the width raises
OverflowError instead of wrapping. The matrix engine and the Fibonacci
strategies widen through fibo.algebra.widen before multiplying, so any
modulus the type can hold works; only values that cannot be stored fail.

Residue is an element of Z/NZ that carries its own modulus.
"""

import operator
from functools import total_ordering

from fibo.algebra import EuclideanDomain, Exponent, widen, rewrap


@total_ordering
class FixedInt(EuclideanDomain, Exponent):
    """Immutable checked integer of width BITS (None = unbounded)."""

    BITS = None
    SIGNED = True

    def __init__(self, value=0):
        value = operator.index(value)
        lo, hi = self.bounds()
        if (lo is not None and value < lo) or (hi is not None and value > hi):
            raise OverflowError(
                f"{type(self).__name__} out of range: {value}")
        self._value = value

    @classmethod
    def bounds(cls) -> tuple:
        """(min, max) representable values; None for an open end."""
        if cls.BITS is None:
            return (None, None) if cls.SIGNED else (0, None)
        if cls.SIGNED:
            half = 1 << (cls.BITS - 1)
            return -half, half - 1
        return 0, (1 << cls.BITS) - 1

    @property
    def value(self) -> int:
        return self._value

    def _coerce(self, other):
        if type(other) is type(self):
            return other._value
        if isinstance(other, FixedInt):
            raise TypeError(
                f"cannot mix {type(self).__name__} and {type(other).__name__}")
        if isinstance(other, int):
            return other
        return NotImplemented

    def _binary(self, other, op, reflected=False):
        v = self._coerce(other)
        if v is NotImplemented:
            return NotImplemented
        a, b = (v, self._value) if reflected else (self._value, v)
        return type(self)(op(a, b))

    # Identities

    def zero(self):
        return type(self)(0)

    def one(self):
        return type(self)(1)

    def is_zero(self) -> bool:
        return self._value == 0

    def is_one(self) -> bool:
        return self._value == 1

    # Ring

    def __add__(self, other):
        return self._binary(other, operator.add)

    def __radd__(self, other):
        return self._binary(other, operator.add, reflected=True)

    def __sub__(self, other):
        return self._binary(other, operator.sub)

    def __rsub__(self, other):
        return self._binary(other, operator.sub, reflected=True)

    def __mul__(self, other):
        return self._binary(other, operator.mul)

    def __rmul__(self, other):
        return self._binary(other, operator.mul, reflected=True)

    def __mod__(self, other):
        return self._binary(other, operator.mod)

    def __rmod__(self, other):
        return self._binary(other, operator.mod, reflected=True)

    def __neg__(self):
        return type(self)(-self._value)

    # Exponent

    def __and__(self, other):
        return self._binary(other, operator.and_)

    def __rand__(self, other):
        return self._binary(other, operator.and_, reflected=True)

    def __rshift__(self, shift):
        # The shift amount is a plain count, whatever its representation.
        return type(self)(self._value >> operator.index(shift))

    # Comparison and conversion

    def __eq__(self, other):
        # Different widths compare unequal.
        if isinstance(other, FixedInt) and type(other) is not type(self):
            return NotImplemented
        v = self._coerce(other)
        if v is NotImplemented:
            return NotImplemented
        return self._value == v

    def __lt__(self, other):
        v = self._coerce(other)
        if v is NotImplemented:
            return NotImplemented
        return self._value < v

    def __hash__(self):
        return hash(self._value)

    def __index__(self):
        return self._value

    def __int__(self):
        return self._value

    def __bool__(self):
        return self._value != 0

    def __repr__(self):
        return f"{type(self).__name__}({self._value})"

    def __str__(self):
        return str(self._value)


class U8(FixedInt):
    BITS, SIGNED = 8, False


class U16(FixedInt):
    BITS, SIGNED = 16, False


class U32(FixedInt):
    BITS, SIGNED = 32, False


class U64(FixedInt):
    BITS, SIGNED = 64, False


class U128(FixedInt):
    BITS, SIGNED = 128, False


class I8(FixedInt):
    BITS, SIGNED = 8, True


class I16(FixedInt):
    BITS, SIGNED = 16, True


class I32(FixedInt):
    BITS, SIGNED = 32, True


class I64(FixedInt):
    BITS, SIGNED = 64, True


class I128(FixedInt):
    BITS, SIGNED = 128, True


class Natural(FixedInt):
    """Arbitrary-precision unsigned integer."""

    BITS, SIGNED = None, False


INDEX_TYPES = {
    'u8': U8, 'u16': U16, 'u32': U32, 'u64': U64, 'u128': U128,
    'i8': I8, 'i16': I16, 'i32': I32, 'i64': I64, 'i128': I128,
    'natural': Natural,
    'int': int,
}


def parse_index(text: str, kind: str = 'int'):
    """Parse a decimal string into the integer type named by `kind`.

    Underscore digit separators are accepted ("1_000_000").
    Raises ValueError for malformed text or an unknown kind, and
    OverflowError when the value does not fit the type.
    """
    try:
        cls = INDEX_TYPES[kind]
    except KeyError:
        raise ValueError(
            f"Unknown integer type {kind!r}, expected one of "
            f"{', '.join(INDEX_TYPES)}") from None
    value = int(text.strip(), 10)
    return cls(value)


@widen.register
def _(x: FixedInt):
    return x.value


@rewrap.register
def _(like: FixedInt, v):
    return type(like)(v)


class Residue(EuclideanDomain):
    """Element of Z/NZ, kept reduced to [0, N).

    Sums and products of residues with the same modulus stay in the ring;
    int operands are taken mod N. Reducing by a multiple of N, or by a
    residue of the same ring, leaves the value unchanged. The matrix engine
    therefore accepts either N or Residue(0, N) as the modulus.
    """

    def __init__(self, value, modulus):
        modulus = operator.index(modulus)
        if modulus <= 0:
            raise ValueError(f"Modulus must be positive, got {modulus}")
        self.modulus = modulus
        self.value = operator.index(value) % modulus

    def _c(self, other):
        if isinstance(other, Residue):
            if other.modulus != self.modulus:
                raise TypeError(
                    f"cannot mix Z/{self.modulus} and Z/{other.modulus}")
            return other.value
        if isinstance(other, int):
            return other
        return NotImplemented

    def _wrap(self, v):
        return Residue(v, self.modulus)

    def zero(self):
        return self._wrap(0)

    def one(self):
        return self._wrap(1)

    def is_zero(self) -> bool:
        return self.value == 0

    def is_one(self) -> bool:
        return self.value == 1 % self.modulus

    def __add__(self, other):
        v = self._c(other)
        return NotImplemented if v is NotImplemented else self._wrap(self.value + v)

    __radd__ = __add__

    def __sub__(self, other):
        v = self._c(other)
        return NotImplemented if v is NotImplemented else self._wrap(self.value - v)

    def __rsub__(self, other):
        v = self._c(other)
        return NotImplemented if v is NotImplemented else self._wrap(v - self.value)

    def __mul__(self, other):
        v = self._c(other)
        return NotImplemented if v is NotImplemented else self._wrap(self.value * v)

    __rmul__ = __mul__

    def __neg__(self):
        return self._wrap(-self.value)

    def __mod__(self, other):
        v = self._c(other)
        if v is NotImplemented:
            return NotImplemented
        if isinstance(other, int) and other % self.modulus != 0:
            raise ValueError(
                f"Z/{self.modulus} can only be reduced by a multiple of {self.modulus}, got {other}")
        return self

    def __eq__(self, other):
        if isinstance(other, Residue):
            return self.modulus == other.modulus and self.value == other.value
        if isinstance(other, int):
            return self.value == other % self.modulus
        return NotImplemented

    __hash__ = None

    def __int__(self):
        return self.value

    def __repr__(self):
        return f"Residue({self.value}, {self.modulus})"
