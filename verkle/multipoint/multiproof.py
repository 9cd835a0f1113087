"""Batch openings of many polynomials at points of the domain."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from .crs import CRS
from .field import MODULUS, batch_inversion, powers_of
from .group import Element
from .ipa import IPAProof, create, slow_vartime_multiscalar_mul
from .lagrange_basis import LagrangeBasis, PrecomputedWeights
from .transcript import Transcript

_COMPRESSED = 32
_UNCOMPRESSED = 64


@dataclass
class VerifierQuery:
    """A claim that the polynomial committed to by commitment takes result at point."""

    commitment: Element
    point: int
    result: int


@dataclass
class ProverQuery:
    """A polynomial, its commitment and its value at a point of the domain."""

    commitment: Element
    poly: LagrangeBasis
    point: int
    result: int

    def to_verifier_query(self) -> VerifierQuery:
        return VerifierQuery(
            commitment=self.commitment,
            point=self.point % MODULUS,
            result=self.result,
        )


def open_point_outside_of_domain(
    crs: CRS,
    precomp: PrecomputedWeights,
    transcript: Transcript,
    polynomial: LagrangeBasis,
    commitment: Element,
    z_i: int,
) -> IPAProof:
    """Prove the value of a polynomial at a point that is not in the domain."""
    b = LagrangeBasis.evaluate_lagrange_coefficients(precomp, crs.n, z_i)
    return create(transcript, crs, list(polynomial.values), commitment, b, z_i)


def open_multiproof(
    crs: CRS,
    precomp: PrecomputedWeights,
    transcript: Transcript,
    queries: Sequence[ProverQuery],
) -> MultiPointProof:
    """Create one proof for all of the queries."""
    transcript.domain_sep(b"multiproof")
    for query in queries:
        transcript.append_point(b"C", query.commitment)
        transcript.append_scalar(b"z", query.point)
        transcript.append_scalar(b"y", query.result)

    r = transcript.challenge_scalar(b"r")
    powers_of_r = powers_of(r, len(queries))

    # Aggregate the polynomials that are opened at the same point.
    aggregated: dict[int, list[int]] = {}
    for query, challenge in zip(queries, powers_of_r):
        acc = aggregated.setdefault(query.point, [0] * crs.n)
        for i, value in enumerate(query.poly.values):
            acc[i] = (acc[i] + value * challenge) % MODULUS
    aggregated_queries = [(point, LagrangeBasis(vals)) for point, vals in aggregated.items()]

    g_x = sum(
        (agg.divide_by_linear_vanishing(precomp, point) for point, agg in aggregated_queries),
        LagrangeBasis.zero(),
    )
    g_x_comm = crs.commit_lagrange_poly(g_x)
    transcript.append_point(b"D", g_x_comm)

    t = transcript.challenge_scalar(b"t")

    g1_den = batch_inversion([t - point for point, _ in aggregated_queries])
    g1_x = sum(
        (agg * den_inv for (_, agg), den_inv in zip(aggregated_queries, g1_den)),
        LagrangeBasis.zero(),
    )
    g1_comm = crs.commit_lagrange_poly(g1_x)
    transcript.append_point(b"E", g1_comm)

    g_3_x = g1_x - g_x
    g_3_x_comm = g1_comm - g_x_comm

    open_proof = open_point_outside_of_domain(crs, precomp, transcript, g_3_x, g_3_x_comm, t)
    return MultiPointProof(open_proof=open_proof, g_x_comm=g_x_comm)


@dataclass
class MultiPointProof:
    """The commitment to g(X) and an opening proof of g1(X) - g(X) at t."""

    open_proof: IPAProof
    g_x_comm: Element

    @classmethod
    def from_bytes(cls, data: bytes, poly_degree: int) -> MultiPointProof:
        if len(data) < _COMPRESSED:
            raise ValueError(f"expected at least {_COMPRESSED} bytes, got {len(data)}")
        g_x_comm = Element.from_bytes(data[:_COMPRESSED])
        open_proof = IPAProof.from_bytes(data[_COMPRESSED:], poly_degree)
        return cls(open_proof=open_proof, g_x_comm=g_x_comm)

    @classmethod
    def from_bytes_unchecked_uncompressed(cls, data: bytes, poly_degree: int) -> MultiPointProof:
        if len(data) < _UNCOMPRESSED:
            raise ValueError(f"expected at least {_UNCOMPRESSED} bytes, got {len(data)}")
        g_x_comm = Element.from_bytes_unchecked_uncompressed(data[:_UNCOMPRESSED])
        open_proof = IPAProof.from_bytes_unchecked_uncompressed(data[_UNCOMPRESSED:], poly_degree)
        return cls(open_proof=open_proof, g_x_comm=g_x_comm)

    def to_bytes(self) -> bytes:
        return self.g_x_comm.to_bytes() + self.open_proof.to_bytes()

    def to_bytes_uncompressed(self) -> bytes:
        return self.g_x_comm.to_bytes_uncompressed() + self.open_proof.to_bytes_uncompressed()

    def check(
        self,
        crs: CRS,
        precomp: PrecomputedWeights,
        queries: Sequence[VerifierQuery],
        transcript: Transcript,
    ) -> bool:
        """Verify the proof against the claimed evaluations."""
        transcript.domain_sep(b"multiproof")
        for query in queries:
            transcript.append_point(b"C", query.commitment)
            transcript.append_scalar(b"z", query.point)
            transcript.append_scalar(b"y", query.result)

        r = transcript.challenge_scalar(b"r")
        powers_of_r = powers_of(r, len(queries))

        transcript.append_point(b"D", self.g_x_comm)
        t = transcript.challenge_scalar(b"t")

        g2_den = batch_inversion([t - query.point for query in queries])
        helper_scalars = [den_inv * r_i % MODULUS for r_i, den_inv in zip(powers_of_r, g2_den)]
        g2_t = sum(h * query.result for h, query in zip(helper_scalars, queries)) % MODULUS

        g1_comm = slow_vartime_multiscalar_mul(
            helper_scalars, [query.commitment for query in queries]
        )
        transcript.append_point(b"E", g1_comm)

        g3_comm = g1_comm - self.g_x_comm
        b = LagrangeBasis.evaluate_lagrange_coefficients(precomp, crs.n, t)
        return self.open_proof.verify_multiexp(transcript, crs, b, g3_comm, t, g2_t)