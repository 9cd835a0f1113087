"""Inner product argument for committing to and opening vectors (BCMS20 style)."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field

from .crs import CRS
from .field import MODULUS, batch_inversion, fr_from_bytes, fr_to_bytes, inner_product, inverse
from .group import Element, SerializationError, multi_scalar_mul
from .transcript import Transcript

_COMPRESSED = 32
_UNCOMPRESSED = 64


def _log2(n: int) -> int:
    """Return log2 of the next power of two at or above n."""
    return (max(n, 1) - 1).bit_length()


def _is_power_of_two(n: int) -> bool:
    return n > 0 and n & (n - 1) == 0


def _to_bits(n: int, bits_needed: int) -> list[int]:
    """Return the low bits_needed bits of n, most significant first."""
    return [(n >> i) & 1 for i in reversed(range(bits_needed))]


def slow_vartime_multiscalar_mul(scalars: Iterable[int], points: Iterable[Element]) -> Element:
    """Return the sum of scalars[i] * points[i]."""
    return multi_scalar_mul(list(points), list(scalars))


@dataclass
class IPAProof:
    """The L and R commitments of every round and the final folded scalar."""

    L_vec: list[Element] = field(default_factory=list)
    R_vec: list[Element] = field(default_factory=list)
    a: int = 0

    def serialized_size(self) -> int:
        return (len(self.L_vec) * 2 + 1) * _COMPRESSED

    def uncompressed_size(self) -> int:
        return len(self.L_vec) * 2 * _UNCOMPRESSED + _COMPRESSED

    @staticmethod
    def _scalar(data: bytes) -> int:
        try:
            return fr_from_bytes(data)
        except ValueError as exc:
            raise SerializationError(str(exc)) from exc

    @classmethod
    def from_bytes(cls, data: bytes, poly_degree: int) -> IPAProof:
        """Decode compressed points followed by the final scalar."""
        num_points = _log2(poly_degree)
        expected = (num_points * 2 + 1) * _COMPRESSED
        if len(data) != expected:
            raise ValueError(f"expected {expected} bytes, got {len(data)}")
        chunks = [data[i:i + _COMPRESSED] for i in range(0, len(data), _COMPRESSED)]
        points = [Element.from_bytes(chunk) for chunk in chunks[: 2 * num_points]]
        return cls(
            L_vec=points[:num_points],
            R_vec=points[num_points:],
            a=cls._scalar(chunks[-1]),
        )

    @classmethod
    def from_bytes_unchecked_uncompressed(cls, data: bytes, poly_degree: int) -> IPAProof:
        """Decode uncompressed points, without subgroup checks, followed by the scalar."""
        num_points = _log2(poly_degree)
        expected = num_points * 2 * _UNCOMPRESSED + _COMPRESSED
        if len(data) != expected:
            raise ValueError(f"expected {expected} bytes, got {len(data)}")
        points_bytes, a_bytes = data[:-_COMPRESSED], data[-_COMPRESSED:]
        points = [
            Element.from_bytes_unchecked_uncompressed(points_bytes[i:i + _UNCOMPRESSED])
            for i in range(0, len(points_bytes), _UNCOMPRESSED)
        ]
        return cls(
            L_vec=points[:num_points],
            R_vec=points[num_points:],
            a=cls._scalar(a_bytes),
        )

    def to_bytes(self) -> bytes:
        """Encode without a length prefix; the reader must know the degree."""
        return b"".join(
            [p.to_bytes() for p in self.L_vec]
            + [p.to_bytes() for p in self.R_vec]
            + [fr_to_bytes(self.a)]
        )

    def to_bytes_uncompressed(self) -> bytes:
        return b"".join(
            [p.to_bytes_uncompressed() for p in self.L_vec]
            + [p.to_bytes_uncompressed() for p in self.R_vec]
            + [fr_to_bytes(self.a)]
        )

    def _generate_challenges(self, transcript: Transcript) -> list[int]:
        challenges = []
        for left, right in zip(self.L_vec, self.R_vec):
            transcript.append_point(b"L", left)
            transcript.append_point(b"R", right)
            challenges.append(transcript.challenge_scalar(b"x"))
        return challenges

    def _start(
        self, transcript: Transcript, crs: CRS, a_comm: Element, input_point: int, output_point: int
    ) -> int | None:
        """Absorb the statement and return w, or None if the proof size is wrong."""
        transcript.domain_sep(b"ipa")
        if crs.n != 1 << len(self.L_vec):
            return None
        transcript.append_point(b"C", a_comm)
        transcript.append_scalar(b"input point", input_point)
        transcript.append_scalar(b"output point", output_point)
        return transcript.challenge_scalar(b"w")

    def verify(
        self,
        transcript: Transcript,
        crs: CRS,
        b: Sequence[int],
        a_comm: Element,
        input_point: int,
        output_point: int,
    ) -> bool:
        """Check the proof by folding the generators round by round."""
        w = self._start(transcript, crs, a_comm, input_point, output_point)
        if w is None:
            return False
        if len(b) != crs.n:
            raise ValueError("b must have one entry per generator")
        q = crs.Q * w
        commitment = a_comm + q * output_point

        challenges = self._generate_challenges(transcript)
        challenges_inv = batch_inversion(challenges)

        for x, x_inv, left, right in zip(challenges, challenges_inv, self.L_vec, self.R_vec):
            commitment = commitment + left * x + right * x_inv

        g = list(crs.G)
        b_vec = [v % MODULUS for v in b]
        for x_inv in challenges_inv:
            half = len(g) // 2
            g = [g_l + g_r * x_inv for g_l, g_r in zip(g[:half], g[half:])]
            b_vec = [(b_l + b_r * x_inv) % MODULUS for b_l, b_r in zip(b_vec[:half], b_vec[half:])]

        expected = g[0] * self.a + q * (self.a * b_vec[0] % MODULUS)
        return expected == commitment

    def verify_multiexp(
        self,
        transcript: Transcript,
        crs: CRS,
        b_vec: Sequence[int],
        a_comm: Element,
        input_point: int,
        output_point: int,
    ) -> bool:
        """Check the proof with a single multi-scalar multiplication."""
        w = self._start(transcript, crs, a_comm, input_point, output_point)
        if w is None:
            return False
        logn = len(self.L_vec)

        challenges = self._generate_challenges(transcript)
        challenges_inv = batch_inversion(challenges)

        b_i = []
        for index in range(crs.n):
            coeff = MODULUS - 1
            for bit, x_inv in zip(_to_bits(index, logn), challenges_inv):
                if bit:
                    coeff = coeff * x_inv % MODULUS
            b_i.append(coeff)
        g_i = [self.a * coeff % MODULUS for coeff in b_i]

        b_0 = inner_product(b_vec, b_i)
        q_i = w * (output_point + self.a * b_0) % MODULUS

        return slow_vartime_multiscalar_mul(
            challenges + challenges_inv + [1, q_i] + g_i,
            self.L_vec + self.R_vec + [a_comm, crs.Q] + list(crs.G),
        ).is_zero()

    def verify_semi_multiexp(
        self,
        transcript: Transcript,
        crs: CRS,
        b_vec: Sequence[int],
        a_comm: Element,
        input_point: int,
        output_point: int,
    ) -> bool:
        """Check the proof by computing the folded generator from its coefficients."""
        w = self._start(transcript, crs, a_comm, input_point, output_point)
        if w is None:
            return False
        logn = len(self.L_vec)
        q = crs.Q * w
        commitment = a_comm + q * output_point

        challenges = self._generate_challenges(transcript)
        challenges_inv = batch_inversion(challenges)

        p = slow_vartime_multiscalar_mul(
            challenges + challenges_inv + [1],
            self.L_vec + self.R_vec + [commitment],
        )

        g_i = []
        for index in range(crs.n):
            coeff = 1
            for bit, x_inv in zip(_to_bits(index, logn), challenges_inv):
                if bit:
                    coeff = coeff * x_inv % MODULUS
            g_i.append(coeff)

        b_0 = inner_product(b_vec, g_i)
        g_0 = slow_vartime_multiscalar_mul(g_i, crs.G)
        expected = g_0 * self.a + q * (self.a * b_0 % MODULUS)
        return expected == p


def create(
    transcript: Transcript,
    crs: CRS,
    a_vec: Sequence[int],
    a_comm: Element,
    b_vec: Sequence[int],
    input_point: int,
) -> IPAProof:
    """Prove that <a_vec, b_vec> is the value committed by a_comm at input_point."""
    transcript.domain_sep(b"ipa")

    a = [v % MODULUS for v in a_vec]
    b = [v % MODULUS for v in b_vec]
    g = list(crs.G)
    n = len(g)
    if len(a) != n or len(b) != n:
        raise ValueError("all input vectors must have the same length as the generators")
    if not _is_power_of_two(n):
        raise ValueError("the vector length must be a power of two")

    output_point = inner_product(a, b)
    transcript.append_point(b"C", a_comm)
    transcript.append_scalar(b"input point", input_point)
    transcript.append_scalar(b"output point", output_point)

    w = transcript.challenge_scalar(b"w")
    q = crs.Q * w

    l_vec: list[Element] = []
    r_vec: list[Element] = []
    for _ in range(_log2(n)):
        half = len(a) // 2
        a_l, a_r = a[:half], a[half:]
        b_l, b_r = b[:half], b[half:]
        g_l, g_r = g[:half], g[half:]

        z_l = inner_product(a_r, b_l)
        z_r = inner_product(a_l, b_r)

        left = slow_vartime_multiscalar_mul(a_r + [z_l], g_l + [q])
        right = slow_vartime_multiscalar_mul(a_l + [z_r], g_r + [q])
        l_vec.append(left)
        r_vec.append(right)

        transcript.append_point(b"L", left)
        transcript.append_point(b"R", right)

        x = transcript.challenge_scalar(b"x")
        x_inv = inverse(x)

        a = [(lo + x * hi) % MODULUS for lo, hi in zip(a_l, a_r)]
        b = [(lo + x_inv * hi) % MODULUS for lo, hi in zip(b_l, b_r)]
        g = [lo + hi * x_inv for lo, hi in zip(g_l, g_r)]

    return IPAProof(L_vec=l_vec, R_vec=r_vec, a=a[0])