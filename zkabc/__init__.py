__version__ = "0.1.0"
__title__ = "zkabc"
__author__ = "zkabc contributors"
__email__ = "zkabc@users.noreply.github.com"
__url__ = "https://github.com/zkabc/zkabc"
__license__ = "MIT"
__description__ = "Zero-knowledge proofs that committed scalars satisfy a * b = c, built on petlib."
__copyright__ = "2026, zkabc contributors"


from zkabc.expr import Secret
from zkabc.group import GroupContext, default_group_context
from zkabc.primitives.dlrep import DLRep
from zkabc.primitives.disjunctive import Side, DisjunctiveStmt, SchnorrDisjunction
from zkabc.primitives.abcproof import (
    ABCProof,
    ABCStmt,
    construct_abc_proof,
    verify_abc_proof,
    make_commitment_pair,
)
