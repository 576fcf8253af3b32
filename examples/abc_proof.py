"""
Proof that a committed value is zero or invertible:
PK{ (v, sk, ...): CM = v * G + r * H, CMTok = r * sk * H, B = inv(v) * G + ub * H, C = v * inv(v) * G + uc * H }

The auditor learns that C commits to 0 or 1, without learning v or sk.
"""

from zkabc import (
    Side,
    default_group_context,
    construct_abc_proof,
    verify_abc_proof,
    make_commitment_pair,
)

ctx = default_group_context()

# The secret key of the audited party. Any non-zero scalar works.
sk = 1 + ctx.random_scalar() % (ctx.order - 1)

# A non-zero amount. The prover knows it is invertible, so it takes the right branch.
amount = 1500
cm, cm_tok, r = make_commitment_pair(amount, sk, context=ctx)

proof = construct_abc_proof(cm, cm_tok, amount, sk, Side.RIGHT, context=ctx)
assert verify_abc_proof(proof, cm, cm_tok, context=ctx)

# A zero amount, proven with the left branch.
cm0, cm_tok0, r0 = make_commitment_pair(0, sk, context=ctx)

proof0 = construct_abc_proof(cm0, cm_tok0, 0, sk, Side.LEFT, context=ctx)
result = verify_abc_proof(proof0, cm0, cm_tok0, context=ctx)
assert result, result.error

# The proof does not transfer to other commitments.
assert not verify_abc_proof(proof0, cm, cm_tok, context=ctx)
