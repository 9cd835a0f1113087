# verkle

Building blocks for Verkle tries, in pure Python with no dependencies
beyond the standard library.

- `verkle.multipoint.field`: scalar-field helpers (`inner_product`,
  `powers_of`, `inverse`, `batch_inversion`, and 32-byte little-endian
  encoding with `fr_to_bytes` / `fr_from_bytes`).
- `verkle.multipoint.group`: the Banderwagon group `Element` with
  compressed (32-byte) and uncompressed (64-byte) encodings,
  `multi_scalar_mul`, and a `DefaultCommitter`.
- `verkle.multipoint.transcript`: a SHA-256 Fiat–Shamir `Transcript`.
- `verkle.multipoint.crs`: the common reference string `CRS`, generated
  from a seed (`CRS.generate`) or the default 256-point one (`CRS.default`).
- `verkle.multipoint.lagrange_basis`: `LagrangeBasis` polynomials in
  evaluation form and `PrecomputedWeights`.
- `verkle.multipoint.ipa`: inner-product-argument proofs (`create`,
  `IPAProof` with three verifiers and byte encodings).
- `verkle.multipoint.multiproof`: multipoint openings (`open_multiproof`,
  `MultiPointProof.check`, `ProverQuery`, `VerifierQuery`).
- `verkle.kvdb`: key-value storage interfaces (`BareMetalKVDb`,
  `BatchWriter`, `BatchDB`) and `DbmDb`, a disk store built on `dbm`.
- `verkle.trie.meta`: `StemMeta` and `BranchMeta` records and their byte
  encodings; `verkle.trie.errors`: the trie's exception classes.

## Installation

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Examples

Prove and check openings of a polynomial at a point of its domain:

```python
from verkle.multipoint.crs import CRS
from verkle.multipoint.lagrange_basis import LagrangeBasis, PrecomputedWeights
from verkle.multipoint.multiproof import MultiPointProof, ProverQuery, open_multiproof
from verkle.multipoint.transcript import Transcript

poly = LagrangeBasis([1, 10, 200, 78])
crs = CRS.generate(4, b"random seed")
precomp = PrecomputedWeights(4)
commitment = crs.commit_lagrange_poly(poly)

query = ProverQuery(commitment=commitment, poly=poly, point=1,
                    result=poly.evaluate_in_domain(1))
proof = open_multiproof(crs, precomp, Transcript(b"foo"), [query])
assert proof.check(crs, precomp, [query.to_verifier_query()], Transcript(b"foo"))

encoded = proof.to_bytes()
assert MultiPointProof.from_bytes(encoded, crs.n) == proof
```

Derive Fiat–Shamir challenges:

```python
from verkle.multipoint.transcript import Transcript

transcript = Transcript(b"simple_protocol")
transcript.append_scalar(b"five", 5)
challenge = transcript.challenge_scalar(b"simple_challenge")
```

Store raw key-value pairs on disk in batches:

```python
from verkle.kvdb import DbmDb

with DbmDb.from_path("./db/verkle_db") as db:
    batch = db.new_batch()
    batch.batch_put(b"key", b"value")
    db.flush(batch)
    assert db.fetch(b"key") == b"value"
```

Encode trie metadata:

```python
from verkle.trie.meta import BranchMeta

meta = BranchMeta.zero()
assert BranchMeta.from_bytes(meta.to_bytes()) == meta
```

Scalars are plain Python integers reduced modulo the Bandersnatch scalar
field order; points are `Element` values. All arithmetic favours clarity
over speed.

## What this package does not do

- It has no trie: there is no insertion of keys and values and no
  computation of a root commitment.
- It does not derive tree keys for account headers, code chunks or storage
  slots, and does not split contract code into chunks. The `verkle.spec`
  package holds no modules.
- It has no trie-level storage layer that reads and writes stem, branch
  and leaf records; `verkle.kvdb` stores raw bytes only, and
  `verkle.trie.meta` only encodes and decodes the records.
- It has no command-line program.