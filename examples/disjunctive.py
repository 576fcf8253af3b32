"""
Or-composition of two discrete-logarithm knowledge proofs sharing one witness:
PK{ (x): (Y1 = x * B1) | (Y2 = x * B2) }
"""

from petlib.ec import EcGroup

from zkabc import Side, DisjunctiveStmt

group = EcGroup()

# Create the base points on the curve.
b1 = group.hash_to_point(b"one")
b2 = group.hash_to_point(b"two")

# The prover only knows the logarithm of y2.
x = 40
y1 = group.hash_to_point(b"unknown log")
y2 = x * b2

stmt = DisjunctiveStmt(b1, y1, b2, y2)
nizk = stmt.prove(x, Side.RIGHT)

# The verifier cannot tell which side was proven.
assert DisjunctiveStmt(b1, y1, b2, y2).verify(nizk)
