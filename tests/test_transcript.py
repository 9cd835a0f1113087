from verkle.multipoint.field import MODULUS, fr_to_bytes
from verkle.multipoint.group import Element
from verkle.multipoint.transcript import Transcript


def _hex(s):
    return fr_to_bytes(s).hex()


def test_vector_0():
    tr = Transcript(b"simple_protocol")
    first = tr.challenge_scalar(b"simple_challenge")
    second = tr.challenge_scalar(b"simple_challenge")
    assert first != second


def test_vector_1():
    tr = Transcript(b"simple_protocol")
    c = tr.challenge_scalar(b"simple_challenge")
    assert _hex(c) == "c2aa02607cbdf5595f00ee0dd94a2bbff0bed6a2bf8452ada9011eadb538d003"


def test_vector_2():
    tr = Transcript(b"simple_protocol")
    tr.append_scalar(b"five", 5)
    tr.append_scalar(b"five again", 5)
    c = tr.challenge_scalar(b"simple_challenge")
    assert _hex(c) == "498732b694a8ae1622d4a9347535be589e4aee6999ffc0181d13fe9e4d037b0b"


def test_vector_3():
    tr = Transcript(b"simple_protocol")
    minus_one = MODULUS - 1
    tr.append_scalar(b"-1", minus_one)
    tr.domain_sep(b"separate me")
    tr.append_scalar(b"-1 again", minus_one)
    tr.domain_sep(b"separate me again")
    tr.append_scalar(b"now 1", 1)
    c = tr.challenge_scalar(b"simple_challenge")
    assert _hex(c) == "14f59938e9e9b1389e74311a464f45d3d88d8ac96adf1c1129ac466de088d618"


def test_vector_4():
    tr = Transcript(b"simple_protocol")
    tr.append_point(b"generator", Element.generator())
    c = tr.challenge_scalar(b"simple_challenge")
    assert _hex(c) == "8c2dafe7c0aabfa9ed542bb2cbf0568399ae794fc44fdfd7dff6cc0e6144921c"