import pytest

from verkle.multipoint.crs import CRS
from verkle.multipoint.field import fr_to_bytes, inner_product
from verkle.multipoint.ipa import IPAProof
from verkle.multipoint.lagrange_basis import LagrangeBasis, PrecomputedWeights
from verkle.multipoint.multiproof import (
    MultiPointProof,
    ProverQuery,
    VerifierQuery,
    open_multiproof,
    open_point_outside_of_domain,
)
from verkle.multipoint.transcript import Transcript


@pytest.fixture(scope="module")
def crs256():
    return CRS.generate(256, b"eth_verkle_oct_2021")


@pytest.fixture(scope="module")
def precomp256():
    return PrecomputedWeights(256)


@pytest.fixture(scope="module")
def small_setup():
    poly = LagrangeBasis([1, 10, 200, 78])
    n = len(poly.values)
    crs = CRS.generate(n, b"random seed")
    precomp = PrecomputedWeights(n)
    return poly, crs, precomp


def test_to_verifier_query(small_setup):
    poly, crs, _ = small_setup
    comm = crs.commit_lagrange_poly(poly)
    query = ProverQuery(commitment=comm, poly=poly, point=2, result=200)
    vq = query.to_verifier_query()
    assert vq == VerifierQuery(commitment=comm, point=2, result=200)


def test_open_multiproof_lagrange(small_setup):
    poly, crs, precomp = small_setup
    point = 1
    query = ProverQuery(
        commitment=crs.commit_lagrange_poly(poly),
        poly=poly,
        point=point,
        result=poly.evaluate_in_domain(point),
    )
    proof = open_multiproof(crs, precomp, Transcript(b"foo"), [query])
    assert proof.check(crs, precomp, [query.to_verifier_query()], Transcript(b"foo"))


def test_open_multiproof_lagrange_2_polys(small_setup):
    poly, crs, precomp = small_setup
    comm = crs.commit_lagrange_poly(poly)
    query_i = ProverQuery(commitment=comm, poly=poly, point=1, result=poly.evaluate_in_domain(1))
    query_j = ProverQuery(commitment=comm, poly=poly, point=2, result=poly.evaluate_in_domain(2))
    proof = open_multiproof(crs, precomp, Transcript(b"foo"), [query_i, query_j])
    assert proof.check(
        crs,
        precomp,
        [query_i.to_verifier_query(), query_j.to_verifier_query()],
        Transcript(b"foo"),
    )


def test_wrong_result_is_rejected(small_setup):
    poly, crs, precomp = small_setup
    query = ProverQuery(
        commitment=crs.commit_lagrange_poly(poly), poly=poly, point=1, result=10
    )
    proof = open_multiproof(crs, precomp, Transcript(b"foo"), [query])
    bad = VerifierQuery(commitment=query.commitment, point=1, result=11)
    assert not proof.check(crs, precomp, [bad], Transcript(b"foo"))


def test_wrong_transcript_label_is_rejected(small_setup):
    poly, crs, precomp = small_setup
    query = ProverQuery(
        commitment=crs.commit_lagrange_poly(poly), poly=poly, point=3, result=78
    )
    proof = open_multiproof(crs, precomp, Transcript(b"foo"), [query])
    assert not proof.check(crs, precomp, [query.to_verifier_query()], Transcript(b"bar"))


def test_uncompressed_round_trip(small_setup):
    poly, crs, precomp = small_setup
    query = ProverQuery(
        commitment=crs.commit_lagrange_poly(poly), poly=poly, point=0, result=1
    )
    proof = open_multiproof(crs, precomp, Transcript(b"foo"), [query])
    data = proof.to_bytes_uncompressed()
    assert len(data) == 64 + 2 * 2 * 64 + 32
    assert MultiPointProof.from_bytes_unchecked_uncompressed(data, crs.n) == proof


def test_compressed_round_trip_small(small_setup):
    poly, crs, precomp = small_setup
    query = ProverQuery(
        commitment=crs.commit_lagrange_poly(poly), poly=poly, point=0, result=1
    )
    proof = open_multiproof(crs, precomp, Transcript(b"foo"), [query])
    data = proof.to_bytes()
    assert len(data) == 32 + (2 * 2 + 1) * 32
    assert MultiPointProof.from_bytes(data, crs.n) == proof


def test_from_bytes_too_short():
    with pytest.raises(ValueError):
        MultiPointProof.from_bytes(b"\x00" * 10, 4)


def test_from_bytes_wrong_length(small_setup):
    poly, crs, precomp = small_setup
    query = ProverQuery(
        commitment=crs.commit_lagrange_poly(poly), poly=poly, point=0, result=1
    )
    data = open_multiproof(crs, precomp, Transcript(b"foo"), [query]).to_bytes()
    with pytest.raises(ValueError):
        MultiPointProof.from_bytes(data[:-32], crs.n)


def test_ipa_consistency(crs256, precomp256):
    n = 256
    input_point = 2101
    poly = [(i % 32) + 1 for i in range(n)]
    polynomial = LagrangeBasis(poly)
    commitment = crs256.commit_lagrange_poly(polynomial)
    assert (
        commitment.to_bytes().hex()
        == "1b9dff8f5ebbac250d291dfe90e36283a227c64b113c37f1bfb9e7a743cdb128"
    )

    prover_transcript = Transcript(b"test")
    proof = open_point_outside_of_domain(
        crs256, precomp256, prover_transcript, polynomial, commitment, input_point
    )
    p_challenge = prover_transcript.challenge_scalar(b"state")
    assert (
        fr_to_bytes(p_challenge).hex()
        == "0a81881cbfd7d7197a54ebd67ed6a68b5867f3c783706675b34ece43e85e7306"
    )

    verifier_transcript = Transcript(b"test")
    b = LagrangeBasis.evaluate_lagrange_coefficients(precomp256, crs256.n, input_point)
    output_point = inner_product(poly, b)
    assert (
        fr_to_bytes(output_point).hex()
        == "4a353e70b03c89f161de002e8713beec0d740a5e20722fd5bd68b30540a33208"
    )

    assert proof.verify_multiexp(
        verifier_transcript, crs256, b, commitment, input_point, output_point
    )
    v_challenge = verifier_transcript.challenge_scalar(b"state")
    assert p_challenge == v_challenge

    data = proof.to_bytes()
    assert IPAProof.from_bytes(data, crs256.n) == proof

    expected = "273395a8febdaed38e94c3d874e99c911a47dd84616d54c55021d5c4131b507e46a4ec2c7e82b77ec2f533994c91ca7edaef212c666a1169b29c323eabb0cf690e0146638d0e2d543f81da4bd597bf3013e1663f340a8f87b845495598d0a3951590b6417f868edaeb3424ff174901d1185a53a3ee127fb7be0af42dda44bf992885bde279ef821a298087717ef3f2b78b2ede7f5d2ea1b60a4195de86a530eb247fd7e456012ae9a070c61635e55d1b7a340dfab8dae991d6273d099d9552815434cc1ba7bcdae341cf7928c6f25102370bdf4b26aad3af654d9dff4b3735661db3177342de5aad774a59d3e1b12754aee641d5f9cd1ecd2751471b308d2d8410add1c9fcc5a2b7371259f0538270832a98d18151f653efbc60895fab8be9650510449081626b5cd24671d1a3253487d44f589c2ff0da3557e307e520cf4e0054bbf8bdffaa24b7e4cce5092ccae5a08281ee24758374f4e65f126cacce64051905b5e2038060ad399c69ca6cb1d596d7c9cb5e161c7dcddc1a7ad62660dd4a5f69b31229b80e6b3df520714e4ea2b5896ebd48d14c7455e91c1ecf4acc5ffb36937c49413b7d1005dd6efbd526f5af5d61131ca3fcdae1218ce81c75e62b39100ec7f474b48a2bee6cef453fa1bc3db95c7c6575bc2d5927cbf7413181ac905766a4038a7b422a8ef2bf7b5059b5c546c19a33c1049482b9a9093f864913ca82290decf6e9a65bf3f66bc3ba4a8ed17b56d890a83bcbe74435a42499dec115"
    assert data.hex() == expected


def test_multiproof_consistency(crs256, precomp256):
    n = 256
    poly_a = [(i % 32) + 1 for i in range(n)]
    poly_b = [(i % 32) + 1 for i in reversed(range(n))]
    polynomial_a = LagrangeBasis(poly_a)
    polynomial_b = LagrangeBasis(poly_b)

    query_a = ProverQuery(
        commitment=crs256.commit_lagrange_poly(polynomial_a),
        poly=polynomial_a,
        point=0,
        result=1,
    )
    query_b = ProverQuery(
        commitment=crs256.commit_lagrange_poly(polynomial_b),
        poly=polynomial_b,
        point=0,
        result=32,
    )

    prover_transcript = Transcript(b"test")
    multiproof = open_multiproof(crs256, precomp256, prover_transcript, [query_a, query_b])
    p_challenge = prover_transcript.challenge_scalar(b"state")
    assert (
        fr_to_bytes(p_challenge).hex()
        == "eee8a80357ff74b766eba39db90797d022e8d6dee426ded71234241be504d519"
    )

    assert multiproof.check(
        crs256,
        precomp256,
        [query_a.to_verifier_query(), query_b.to_verifier_query()],
        Transcript(b"test"),
    )

    data = multiproof.to_bytes()
    assert MultiPointProof.from_bytes(data, crs256.n) == multiproof

    expected = "4f53588244efaf07a370ee3f9c467f933eed360d4fbf7a19dfc8bc49b67df4711bf1d0a720717cd6a8c75f1a668cb7cbdd63b48c676b89a7aee4298e71bd7f4013d7657146aa9736817da47051ed6a45fc7b5a61d00eb23e5df82a7f285cc10e67d444e91618465ca68d8ae4f2c916d1942201b7e2aae491ef0f809867d00e83468fb7f9af9b42ede76c1e90d89dd789ff22eb09e8b1d062d8a58b6f88b3cbe80136fc68331178cd45a1df9496ded092d976911b5244b85bc3de41e844ec194256b39aeee4ea55538a36139211e9910ad6b7a74e75d45b869d0a67aa4bf600930a5f760dfb8e4df9938d1f47b743d71c78ba8585e3b80aba26d24b1f50b36fa1458e79d54c05f58049245392bc3e2b5c5f9a1b99d43ed112ca82b201fb143d401741713188e47f1d6682b0bf496a5d4182836121efff0fd3b030fc6bfb5e21d6314a200963fe75cb856d444a813426b2084dfdc49dca2e649cb9da8bcb47859a4c629e97898e3547c591e39764110a224150d579c33fb74fa5eb96427036899c04154feab5344873d36a53a5baefd78c132be419f3f3a8dd8f60f72eb78dd5f43c53226f5ceb68947da3e19a750d760fb31fa8d4c7f53bfef11c4b89158aa56b1f4395430e16a3128f88e234ce1df7ef865f2d2c4975e8c82225f578310c31fd41d265fd530cbfa2b8895b228a510b806c31dff3b1fa5c08bffad443d567ed0e628febdd22775776e0cc9cebcaea9c6df9279a5d91dd0ee5e7a0434e989a160005321c97026cb559f71db23360105460d959bcdf74bee22c4ad8805a1d497507"
    assert data.hex() == expected