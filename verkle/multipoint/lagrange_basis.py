"""Polynomials in evaluation form over the domain 0, 1, ..., n-1."""

from __future__ import annotations

from collections.abc import Iterable

from .field import MODULUS, batch_inversion, inverse


class LagrangeBasis:
    """A polynomial given by its values on the domain starting at zero."""

    __slots__ = ("values",)

    def __init__(self, values: Iterable[int]) -> None:
        self.values = [v % MODULUS for v in values]

    @property
    def domain(self) -> int:
        return len(self.values)

    @classmethod
    def zero(cls) -> LagrangeBasis:
        """The empty polynomial, an identity for addition."""
        return cls([])

    def __add__(self, other: LagrangeBasis) -> LagrangeBasis:
        if not isinstance(other, LagrangeBasis):
            return NotImplemented
        if self.domain == 0:
            return other
        if other.domain == 0:
            return self
        summed = [a + b for a, b in zip(self.values, other.values)]
        return LagrangeBasis(summed + self.values[len(summed):])

    def __mul__(self, scalar: int) -> LagrangeBasis:
        if not isinstance(scalar, int):
            return NotImplemented
        return LagrangeBasis(v * scalar for v in self.values)

    __rmul__ = __mul__

    def __sub__(self, other: LagrangeBasis | int) -> LagrangeBasis:
        if isinstance(other, LagrangeBasis):
            return LagrangeBasis(a - b for a, b in zip(self.values, other.values))
        if isinstance(other, int):
            return LagrangeBasis(v - other for v in self.values)
        return NotImplemented

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, LagrangeBasis):
            return NotImplemented
        return self.values == other.values

    def __repr__(self) -> str:
        return f"LagrangeBasis({self.values!r})"

    def divide_by_linear_vanishing(
        self, precomp: PrecomputedWeights, index: int
    ) -> LagrangeBasis:
        """Return (f(X) - f(x_index)) / (X - x_index) in evaluation form."""
        quotient = [0] * self.domain
        y = self.values[index]
        for i, f_i in enumerate(self.values):
            if i == index:
                continue
            den = i - index
            den_inv = precomp.get_inverted_element(abs(den), den < 0)
            q_i = (f_i - y) * den_inv % MODULUS
            quotient[i] = q_i
            ratio = precomp.get_ratio_of_barycentric_weights(index, i)
            quotient[index] = (quotient[index] - ratio * q_i) % MODULUS
        return LagrangeBasis(quotient)

    def evaluate_in_domain(self, index: int) -> int:
        return self.values[index]

    def evaluate_outside_domain(self, precomp: PrecomputedWeights, point: int) -> int:
        """Evaluate at a point that is not in the domain, using barycentric weights."""
        inverses = batch_inversion([point - i for i in range(self.domain)])
        summand = sum(
            precomp.get_inverse_barycentric_weight(i) * y_i * inv
            for i, (y_i, inv) in enumerate(zip(self.values, inverses))
        )
        return summand % MODULUS * _vanishing_at(point, self.domain) % MODULUS

    @staticmethod
    def evaluate_lagrange_coefficients(
        precomp: PrecomputedWeights, domain_size: int, point: int
    ) -> list[int]:
        """Return L_i(point) for every i in the domain, with point outside the domain."""
        denominators = [
            precomp.get_barycentric_weight(i) * (point - i) for i in range(domain_size)
        ]
        a_z = _vanishing_at(point, domain_size)
        return [inv * a_z % MODULUS for inv in batch_inversion(denominators)]


def _vanishing_at(point: int, domain_size: int) -> int:
    result = 1
    for i in range(domain_size):
        result = result * (point - i) % MODULUS
    return result


class PrecomputedWeights:
    """Barycentric weights A'(x_i), their inverses, and 1/k for the domain."""

    def __init__(self, domain_size: int) -> None:
        if domain_size < 1:
            raise ValueError("domain size must be at least one")
        self.domain_size = domain_size
        weights = [
            self.compute_barycentric_weight_for(x_i, domain_size)
            for x_i in range(domain_size)
        ]
        self._barycentric_weights = weights + [inverse(w) for w in weights]
        inverted = [inverse(k) for k in range(1, domain_size)]
        self._inverted_domain = inverted + [(-k) % MODULUS for k in inverted]

    def get_inverted_element(self, domain_element: int, is_negative: bool) -> int:
        """Return 1/k, or -1/k when is_negative, for k in 1..domain_size-1."""
        half = len(self._inverted_domain) // 2
        if not 1 <= domain_element <= half:
            raise IndexError(f"domain element {domain_element} has no precomputed inverse")
        index = domain_element - 1
        if is_negative:
            index += half
        return self._inverted_domain[index]

    def get_ratio_of_barycentric_weights(self, m: int, i: int) -> int:
        """Return A'(x_m) / A'(x_i)."""
        half = len(self._barycentric_weights) // 2
        return self._barycentric_weights[m] * self._barycentric_weights[i + half] % MODULUS

    def get_barycentric_weight(self, i: int) -> int:
        return self._barycentric_weights[i]

    def get_inverse_barycentric_weight(self, i: int) -> int:
        return self._barycentric_weights[i + len(self._barycentric_weights) // 2]

    @staticmethod
    def compute_barycentric_weight_for(domain_element: int, domain_size: int) -> int:
        """Return A'(x_j): the product of (x_j - x) over the other domain points."""
        weight = 1
        for element in range(domain_size):
            if element != domain_element:
                weight = weight * (domain_element - element) % MODULUS
        return weight