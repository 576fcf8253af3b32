r"""
Disjunctive proof of knowledge of one discrete logarithm among two.

.. math::

    PK\{ (x): Y_1 = x B_1 \lor Y_2 = x B_2 \}

The prover knows a witness for one side only. That side is proven for real, the other one is
simulated, and the verifier cannot tell which is which.

Which side the prover knows is a proving strategy, chosen by the caller. It is not part of the
proof.
"""

import enum
import logging

from zkabc.base import NIZK, VerificationResult
from zkabc.expr import Secret
from zkabc.utils import ensure_bn
from zkabc.composition import OrProofStmt
from zkabc.primitives.dlrep import DLRep
from zkabc.exceptions import InvalidInputError, SubProofError

log = logging.getLogger(__name__)


class Side(enum.Enum):
    """Branch of a disjunction the prover knows a witness for."""

    LEFT = 0
    RIGHT = 1


class DisjunctiveStmt:
    r"""
    Statement :math:`PK\{ (x): Y_1 = x B_1 \lor Y_2 = x B_2 \}`.

    >>> from zkabc.utils import make_generators
    >>> b1, b2 = make_generators(2)
    >>> stmt = DisjunctiveStmt(b1, 7 * b1, b2, 3 * b2)
    >>> nizk = stmt.prove(3, Side.RIGHT)
    >>> bool(stmt.verify(nizk))
    True

    Args:
        base1: :math:`B_1`
        result1: :math:`Y_1`
        base2: :math:`B_2`
        result2: :math:`Y_2`
    """

    def __init__(self, base1, result1, base2, result2):
        self.pairs = [(base1, result1), (base2, result2)]
        self.secret_vars = [Secret(name="x_left"), Secret(name="x_right")]
        self.or_stmt = OrProofStmt(
            *[
                DLRep(result, secret * base)
                for (base, result), secret in zip(self.pairs, self.secret_vars)
            ]
        )

    def prove(self, witness, side):
        """
        Prove the ``side`` branch with ``witness``, simulate the other one.

        Raises:
            InvalidInputError: If ``side`` is not a :py:class:`Side`.
            SubProofError: If the witness does not satisfy the chosen branch.
        """
        if not isinstance(side, Side):
            raise InvalidInputError("Expected a Side. Got: {}".format(side))

        witness = ensure_bn(witness)
        base, result = self.pairs[side.value]
        if witness * base != result:
            raise SubProofError(
                "The {} branch does not hold for the given witness".format(side.name.lower())
            )

        secret = self.secret_vars[side.value]
        return self.or_stmt.prove({secret: witness}, chosen_idx=side.value)

    def verify(self, nizk):
        """
        Verify a disjunctive proof.

        Returns:
            VerificationResult: Accepted, or rejected with the reason.
        """
        if not isinstance(nizk, NIZK):
            return VerificationResult.reject(
                SubProofError("Expected a NIZK. Got: {}".format(type(nizk).__name__))
            )
        try:
            return self.or_stmt.verify(nizk)
        except (TypeError, ValueError) as e:
            return VerificationResult.reject(
                SubProofError("Malformed disjunctive proof: {}".format(e))
            )


class SchnorrDisjunction:
    """
    The disjunctive sub-proof used by :py:mod:`zkabc.primitives.abcproof` by default.

    Any object with the same ``generate`` and ``verify`` methods can be used instead.
    """

    def generate(self, base1, result1, base2, result2, witness, side):
        """
        Prove :math:`Y_1 = x B_1 \\lor Y_2 = x B_2` knowing the witness of ``side``.
        """
        log.debug("Generating disjunctive proof for the %s branch", side)
        return DisjunctiveStmt(base1, result1, base2, result2).prove(witness, side)

    def verify(self, base1, result1, base2, result2, proof):
        """
        Check a proof produced by :py:meth:`generate` against the same points.

        Returns:
            VerificationResult: Accepted, or rejected with the reason.
        """
        return DisjunctiveStmt(base1, result1, base2, result2).verify(proof)
