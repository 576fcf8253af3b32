"""
Sending an ABC proof over the wire, with an explicit group context.
"""

from petlib.ec import EcGroup

from zkabc import ABCProof, ABCStmt, GroupContext, Side, make_commitment_pair

# secp224r1 instead of the default curve.
ctx = GroupContext.from_group(EcGroup(713))

sk = 7
cm, cm_tok, _ = make_commitment_pair(5, sk, context=ctx)

# Prover side.
data = ABCStmt(cm, cm_tok, context=ctx).prove(5, sk, Side.RIGHT).serialize()

# Verifier side.
proof = ABCProof.deserialize(data, context=ctx)
result = ABCStmt(cm, cm_tok, context=ctx).verify(proof)
result.raise_for_error()
