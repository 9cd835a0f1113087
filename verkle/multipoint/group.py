"""The banderwagon prime-order group and a Pedersen-style committer."""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from .field import MODULUS as FR_MODULUS
from .field import fr_from_le_bytes_mod_order

Q = 0x73EDA753299D7D483339D80809A1D80553BDA402FFFE5BFEFFFFFFFF00000001
COEFF_A = Q - 5
COEFF_D = 0x6389C12633C267CBC66E3BF86BE3B6D8CB66677177E54F92B369F2F5188D58E7
_GEN_X = 0x29C132CC2C0B34C5743711777BBE42F32B79C022AD998465E1E71866A252AE18
_GEN_Y = 0x2A6C669EDA123E0F157D8B50BADCD586358CAD81EEE464605E3167B6CC974166

_HALF = (Q - 1) // 2
_S = 0
_T = Q - 1
while _T % 2 == 0:
    _T //= 2
    _S += 1
_NON_RESIDUE = next(z for z in range(2, 1000) if pow(z, _HALF, Q) == Q - 1)


class SerializationError(ValueError):
    """Raised when bytes do not encode a valid group element or scalar."""


def _is_qr(a: int) -> bool:
    return pow(a, _HALF, Q) == 1


def _sqrt(a: int) -> int | None:
    a %= Q
    if a == 0:
        return 0
    if not _is_qr(a):
        return None
    m, c = _S, pow(_NON_RESIDUE, _T, Q)
    t, r = pow(a, _T, Q), pow(a, (_T + 1) // 2, Q)
    while t != 1:
        i, t2 = 0, t
        while t2 != 1:
            t2 = t2 * t2 % Q
            i += 1
        b = pow(c, 1 << (m - i - 1), Q)
        m, c = i, b * b % Q
        t, r = t * c % Q, r * b % Q
    return r


def _is_positive(y: int) -> bool:
    return y > _HALF


_IDENTITY = (0, 1, 1, 0)


def _add(p, q):
    x1, y1, z1, t1 = p
    x2, y2, z2, t2 = q
    a = x1 * x2 % Q
    b = y1 * y2 % Q
    c = COEFF_D * t1 % Q * t2 % Q
    d = z1 * z2 % Q
    e = ((x1 + y1) * (x2 + y2) - a - b) % Q
    f = (d - c) % Q
    g = (d + c) % Q
    h = (b + 5 * a) % Q
    return (e * f % Q, g * h % Q, f * g % Q, e * h % Q)


def _neg(p):
    x, y, z, t = p
    return ((-x) % Q, y, z, (-t) % Q)


def _msm(points: Sequence[tuple], scalars: Sequence[int]) -> tuple:
    pairs = [(p, s % FR_MODULUS) for p, s in zip(points, scalars) if s % FR_MODULUS]
    if not pairs:
        return _IDENTITY
    c = 8 if len(pairs) >= 32 else 4
    mask = (1 << c) - 1
    nbits = max(s.bit_length() for _, s in pairs)
    windows = (nbits + c - 1) // c
    result = _IDENTITY
    for w in reversed(range(windows)):
        for _ in range(c):
            result = _add(result, result)
        buckets: list = [None] * (mask + 1)
        shift = w * c
        for p, s in pairs:
            idx = (s >> shift) & mask
            if idx:
                buckets[idx] = p if buckets[idx] is None else _add(buckets[idx], p)
        running = _IDENTITY
        total = _IDENTITY
        for bucket in reversed(buckets[1:]):
            if bucket is not None:
                running = _add(running, bucket)
            total = _add(total, running)
        result = _add(result, total)
    return result


class Element:
    """An element of the banderwagon group (Bandersnatch modulo 2-torsion)."""

    __slots__ = ("_p",)

    def __init__(self, point: tuple) -> None:
        self._p = point

    @classmethod
    def _from_affine(cls, x: int, y: int) -> Element:
        return cls((x % Q, y % Q, 1, x * y % Q))

    def _affine(self) -> tuple[int, int]:
        x, y, z, _ = self._p
        zinv = pow(z, -1, Q)
        return x * zinv % Q, y * zinv % Q

    @classmethod
    def generator(cls) -> Element:
        return cls._from_affine(_GEN_X, _GEN_Y)

    @classmethod
    def zero(cls) -> Element:
        return cls(_IDENTITY)

    @classmethod
    def from_bytes(cls, data: bytes) -> Element:
        """Decode a 32-byte big-endian compressed element, checking subgroup membership."""
        if len(data) != 32:
            raise SerializationError("compressed element must be 32 bytes")
        x = int.from_bytes(data, "big")
        if x >= Q:
            raise SerializationError("x coordinate is not canonical")
        x2 = x * x % Q
        den = (COEFF_D * x2 - 1) % Q
        if den == 0:
            raise SerializationError("no point with this x coordinate")
        y = _sqrt((COEFF_A * x2 - 1) * pow(den, -1, Q))
        if y is None:
            raise SerializationError("no point with this x coordinate")
        if not _is_positive(y):
            y = (-y) % Q
        if not _is_qr((1 - COEFF_A * x2) % Q):
            raise SerializationError("point is not in the subgroup")
        return cls._from_affine(x, y)

    def to_bytes(self) -> bytes:
        x, y = self._affine()
        if not _is_positive(y):
            x = (-x) % Q
        return x.to_bytes(32, "big")

    @classmethod
    def from_bytes_unchecked_uncompressed(cls, data: bytes) -> Element:
        if len(data) != 64:
            raise SerializationError("uncompressed element must be 64 bytes")
        x = int.from_bytes(data[:32], "little")
        y = int.from_bytes(data[32:], "little")
        return cls._from_affine(x, y)

    def to_bytes_uncompressed(self) -> bytes:
        x, y = self._affine()
        return x.to_bytes(32, "little") + y.to_bytes(32, "little")

    def map_to_scalar_field(self) -> int:
        x, y = self._affine()
        base = x * pow(y, -1, Q) % Q
        return fr_from_le_bytes_mod_order(base.to_bytes(32, "little"))

    def is_zero(self) -> bool:
        return self._p[0] == 0

    def __add__(self, other: Element) -> Element:
        return Element(_add(self._p, other._p))

    def __sub__(self, other: Element) -> Element:
        return Element(_add(self._p, _neg(other._p)))

    def __neg__(self) -> Element:
        return Element(_neg(self._p))

    def __mul__(self, scalar: int) -> Element:
        return Element(_msm([self._p], [scalar]))

    __rmul__ = __mul__

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Element):
            return NotImplemented
        x1, y1, _, _ = self._p
        x2, y2, _, _ = other._p
        return x1 * y2 % Q == x2 * y1 % Q

    def __hash__(self) -> int:
        return hash(self.to_bytes())

    def __repr__(self) -> str:
        return f"Element({self.to_bytes().hex()})"


def try_reduce_to_element(data: bytes) -> Element | None:
    """Reduce bytes to an x coordinate and return the element it names, if any."""
    x = int.from_bytes(data, "big") % Q
    try:
        return Element.from_bytes(x.to_bytes(32, "big"))
    except SerializationError:
        return None


def multi_scalar_mul(points: Sequence[Element], scalars: Sequence[int]) -> Element:
    """Return the sum of scalars[i] * points[i]."""
    return Element(_msm([p._p for p in points], list(scalars)))


class DefaultCommitter:
    """Commits to vectors in evaluation form against a fixed set of generators."""

    def __init__(self, points: Sequence[Element]) -> None:
        self._points = list(points)

    def commit_lagrange(self, evaluations: Sequence[int]) -> Element:
        if len(evaluations) > len(self._points):
            raise ValueError("more evaluations than generators")
        return multi_scalar_mul(self._points[: len(evaluations)], evaluations)

    def scalar_mul(self, value: int, lagrange_index: int) -> Element:
        return self._points[lagrange_index] * value

    def commit_sparse(self, val_indices: Iterable[tuple[int, int]]) -> Element:
        result = Element.zero()
        for value, index in val_indices:
            result = result + self.scalar_mul(value, index)
        return result