"""Banderwagon group, scalar field, transcripts, CRS, Lagrange basis, IPA and multipoint proofs."""