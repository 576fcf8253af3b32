r"""
ZK proof that three committed scalars satisfy :math:`a \cdot b = c`.

It shows that the value :math:`v` committed in :math:`CM` is either zero or invertible, and that a
companion commitment :math:`C` opens to 0 or 1 accordingly, without revealing :math:`v` or the
secret key :math:`sk`.

Public: :math:`G, H, CM, CMTok, B, C`, where

* :math:`CM = v G + r H`
* :math:`CMTok = r \cdot sk H`
* :math:`B = v^{-1} G + u_b H`, with :math:`0^{-1} = 0` by convention
* :math:`C = (v v^{-1}) G + u_c H`

The prover draws :math:`u_1, u_2, u_3` and computes

* :math:`T_1 = u_1 G + u_2 CMTok`
* :math:`T_2 = u_1 B + u_3 H`
* :math:`c = Hash(G, H, CM, CMTok, B, C, T_1, T_2)`
* :math:`j = u_1 + v c`, :math:`k = u_2 + sk^{-1} c`, :math:`l = u_3 + (u_c - v u_b) c`

and a disjunctive proof that :math:`CMTok = sk \cdot CM` (so :math:`v = 0`) or
:math:`C - G = u_c H` (so :math:`C` commits to 1). The verifier checks the disjunctive proof, the
challenge, and

* :math:`c CM + T_1 = j G + k CMTok`
* :math:`c C + T_2 = j B + l H`

All response scalars, :math:`l` included, are reduced modulo the group order.

>>> from zkabc.group import default_group_context
>>> ctx = default_group_context()
>>> cm, cm_tok, _ = make_commitment_pair(5, 7, context=ctx)
>>> proof = construct_abc_proof(cm, cm_tok, 5, 7, Side.RIGHT, context=ctx)
>>> bool(verify_abc_proof(proof, cm, cm_tok, context=ctx))
True
"""

import logging

import attr
from petlib.bn import Bn
from petlib.ec import EcPt
from petlib.pack import encode, decode

from zkabc.base import NIZK, Prover, Verifier, VerificationResult
from zkabc.group import default_group_context
from zkabc.utils import ensure_bn
from zkabc.primitives.disjunctive import Side, SchnorrDisjunction
from zkabc.exceptions import (
    ChallengeMismatchError,
    EquationMismatchError,
    GroupMismatchError,
    InvalidInputError,
    RandomnessError,
    SubProofError,
)

log = logging.getLogger(__name__)

_NUM_PROOF_FIELDS = 10

_RANDOMIZER_NAMES = ("u1", "u2", "u3", "ub", "uc")


@attr.s(frozen=True)
class ABCProof:
    """
    Multiplicative-relationship proof.

    Fields are listed in their canonical order, which is also the serialization order.
    """

    #: Commitment to :math:`v^{-1}`, or to 0 if :math:`v = 0`.
    b = attr.ib()
    #: Commitment to 0 or 1.
    c = attr.ib()
    #: :math:`u_1 G + u_2 CMTok`
    t1 = attr.ib()
    #: :math:`u_1 B + u_3 H`
    t2 = attr.ib()
    challenge = attr.ib()
    j = attr.ib()
    k = attr.ib()
    l = attr.ib()
    #: :math:`u_c \cdot sk H`
    c_token = attr.ib()
    #: :py:class:`zkabc.base.NIZK` of the disjunction.
    disjunctive_proof = attr.ib()

    def serialize(self):
        """Encode the proof with :py:mod:`petlib.pack`."""
        disj = self.disjunctive_proof
        or_challenges, sub_responses = disj.responses
        return encode(
            [
                self.b,
                self.c,
                self.t1,
                self.t2,
                self.challenge,
                self.j,
                self.k,
                self.l,
                self.c_token,
                [disj.challenge, list(or_challenges), [list(r) for r in sub_responses]],
            ]
        )

    @classmethod
    def deserialize(cls, data, context=None):
        """
        Decode a proof produced by :py:meth:`serialize`.

        Raises:
            ValueError: If the data does not hold a proof, or a scalar is not reduced modulo the
                group order.
            GroupMismatchError: If the points are not in the context group.
        """
        if context is None:
            context = default_group_context()

        fields = decode(data)
        if not isinstance(fields, (list, tuple)) or len(fields) != _NUM_PROOF_FIELDS:
            raise ValueError("Serialized data does not hold an ABC proof")

        b, c, t1, t2, challenge, j, k, l, c_token, disj = fields
        for point in (b, c, t1, t2, c_token):
            if not isinstance(point, EcPt):
                raise ValueError("Expected a point. Got: {}".format(type(point).__name__))
            if point.group != context.group:
                raise GroupMismatchError("Proof points are not in the context group")
        for scalar in (challenge, j, k, l):
            if not isinstance(scalar, Bn) or not 0 <= scalar < context.order:
                raise ValueError("Proof scalars must be reduced modulo the group order")

        disj_challenge, or_challenges, sub_responses = disj
        disjunctive_proof = NIZK(
            challenge=disj_challenge,
            responses=(list(or_challenges), [list(r) for r in sub_responses]),
        )
        return cls(b, c, t1, t2, challenge, j, k, l, c_token, disjunctive_proof)


def make_commitment_pair(value, sk, randomness=None, context=None):
    """
    Honestly derive the public commitments
    :math:`CM = v G + r H` and :math:`CMTok = r \\cdot sk H`.

    Returns:
        tuple: ``(cm, cm_tok, randomness)``
    """
    if context is None:
        context = default_group_context()
    if randomness is None:
        randomness = context.random_scalar()
    randomness = ensure_bn(randomness)

    cm = context.pedersen_commit(value, randomness)
    cm_tok = (randomness * ensure_bn(sk) % context.order) * context.h
    return cm, cm_tok, randomness


class ABCStmt:
    """
    Statement that the value committed in ``cm`` is zero or invertible, for the key token
    ``cm_tok``.

    Args:
        cm: Commitment :math:`CM` to the value.
        cm_tok: Token :math:`CMTok = r \\cdot sk H`.
        context (:py:class:`zkabc.group.GroupContext`): Group context. Defaults to
            :py:func:`zkabc.group.default_group_context`.
        disjunction: Disjunctive sub-proof with ``generate`` and ``verify`` methods. Defaults to
            :py:class:`zkabc.primitives.disjunctive.SchnorrDisjunction`.
            ``verify`` may return any truthy or falsy value. The ``error`` attribute of a falsy
            result, if any, is reported as the rejection reason.
    """

    def __init__(self, cm, cm_tok, context=None, disjunction=None):
        if context is None:
            context = default_group_context()
        if disjunction is None:
            disjunction = SchnorrDisjunction()
        for point in (cm, cm_tok):
            if point.group != context.group:
                raise GroupMismatchError("Commitments are not in the context group")

        self.cm = cm
        self.cm_tok = cm_tok
        self.context = context
        self.disjunction = disjunction

    def compute_challenge(self, b, c, t1, t2):
        """:math:`Hash(G, H, CM, CMTok, B, C, T_1, T_2)`"""
        ctx = self.context
        return ctx.hash_to_scalar(ctx.g, ctx.h, self.cm, self.cm_tok, b, c, t1, t2)

    def disjunction_points(self, c):
        """Bases and results of the disjunction: :math:`(CM, CMTok, H, C - G)`."""
        return self.cm, self.cm_tok, self.context.h, c + (-self.context.g)

    def get_prover(self, value, sk, side, rng=None):
        return ABCProver(self, value, sk, side, rng=rng)

    def get_verifier(self):
        return ABCVerifier(self)

    def prove(self, value, sk, side, rng=None):
        """
        Construct a proof.

        Args:
            value: The committed value :math:`v`.
            sk: The secret key, non-zero modulo the group order.
            side (:py:class:`Side`): ``Side.LEFT`` if :math:`v = 0`, ``Side.RIGHT`` otherwise.
            rng: Optional callable returning uniform scalars. Defaults to the context's.

        Raises:
            InvalidInputError: If the side does not match the value, or the key is zero.
            RandomnessError: If the entropy source fails.
            SubProofError: If the disjunctive sub-proof cannot be generated.
        """
        return self.get_prover(value, sk, side, rng=rng).get_nizk_proof()

    def verify(self, proof):
        """
        Verify a proof.

        Returns:
            VerificationResult: Accepted, or rejected with the reason.
        """
        return self.get_verifier().verify_nizk(proof)


class ABCProver(Prover):
    """
    Prover of an :py:class:`ABCStmt`. One instance produces one proof.

    Inputs are checked on construction, before any randomness is drawn.
    """

    def __init__(self, stmt, value, sk, side, rng=None):
        order = stmt.context.order
        value = ensure_bn(value) % order
        sk = ensure_bn(sk) % order

        if not isinstance(side, Side):
            raise InvalidInputError("Expected a Side. Got: {}".format(side))
        if sk == 0:
            raise InvalidInputError("The secret key must be invertible")
        if (side is Side.LEFT) != (value == 0):
            raise InvalidInputError("Invalid side-value pair")

        super().__init__(stmt, {"value": value, "sk": sk})
        self.side = side
        self.rng = rng if rng is not None else stmt.context.random_scalar

    def internal_commit(self, randomizers_dict=None):
        """
        Draw the blinding scalars, and compute :math:`B, C, T_1, T_2` and the disjunctive proof.

        Args:
            randomizers_dict: Optional mapping with any of the keys ``u1``, ``u2``, ``u3``,
                ``ub``, ``uc``. Missing values are drawn from the prover's source.
        """
        stmt = self.stmt
        ctx = stmt.context
        value, sk = self.secret_values["value"], self.secret_values["sk"]

        randomizers = dict(randomizers_dict or {})
        for name in _RANDOMIZER_NAMES:
            if name not in randomizers:
                randomizers[name] = self.rng()
        self.randomizers = {name: ensure_bn(u) for name, u in randomizers.items()}
        u1, u2, u3, ub, uc = (self.randomizers[name] for name in _RANDOMIZER_NAMES)

        self.c_token = uc * (sk * ctx.h)

        if self.side is Side.LEFT:
            b = ctx.pedersen_commit(ctx.inverse(0), ub)
            c = ctx.pedersen_commit(0, uc)
            witness = sk
        else:
            b = ctx.pedersen_commit(ctx.inverse(value), ub)
            c = ctx.pedersen_commit(1, uc)
            witness = uc

        try:
            self.disjunctive_proof = stmt.disjunction.generate(
                *stmt.disjunction_points(c), witness, self.side
            )
        except (SubProofError, RandomnessError):
            raise
        except Exception as e:
            raise SubProofError("Failed to generate the disjunctive proof") from e

        t1 = ctx.group.wsum([u1, u2], [ctx.g, stmt.cm_tok])
        t2 = ctx.group.wsum([u1, u3], [b, ctx.h])
        return b, c, t1, t2

    def compute_response(self, challenge):
        """
        Compute :math:`j = u_1 + v c`, :math:`k = u_2 + sk^{-1} c` and
        :math:`l = u_3 + (u_c - v u_b) c`, all modulo the group order.
        """
        ctx = self.stmt.context
        order = ctx.order
        value, sk = self.secret_values["value"], self.secret_values["sk"]
        u = self.randomizers

        j = (u["u1"] + value * challenge) % order
        k = (u["u2"] + ctx.inverse(sk) * challenge) % order
        l = (u["u3"] + (u["uc"] - value * u["ub"]) * challenge) % order
        return j, k, l

    def get_nizk_proof(self):
        b, c, t1, t2 = self.internal_commit()
        challenge = self.stmt.compute_challenge(b, c, t1, t2)
        j, k, l = self.compute_response(challenge)
        log.debug("Constructed ABC proof for the %s branch", self.side)
        return ABCProof(
            b=b,
            c=c,
            t1=t1,
            t2=t2,
            challenge=challenge,
            j=j,
            k=k,
            l=l,
            c_token=self.c_token,
            disjunctive_proof=self.disjunctive_proof,
        )


class ABCVerifier(Verifier):
    """
    Verifier of an :py:class:`ABCStmt`. Stops at the first failed check.
    """

    def _reject(self, error):
        log.debug("ABC proof rejected: %s", error)
        return VerificationResult.reject(error)

    def verify_nizk(self, proof):
        stmt = self.stmt
        ctx = stmt.context

        sub_result = stmt.disjunction.verify(
            *stmt.disjunction_points(proof.c), proof.disjunctive_proof
        )
        if not sub_result:
            reason = getattr(sub_result, "error", None)
            return self._reject(SubProofError("Disjunctive proof is invalid: {}".format(reason)))

        challenge = stmt.compute_challenge(proof.b, proof.c, proof.t1, proof.t2)
        if challenge != proof.challenge:
            return self._reject(ChallengeMismatchError("Proof contains an incorrect challenge"))

        j, k, l = ensure_bn(proof.j), ensure_bn(proof.k), ensure_bn(proof.l)

        # c CM + T1 == j G + k CMTok
        lhs1 = challenge * stmt.cm + proof.t1
        rhs1 = ctx.group.wsum([j, k], [ctx.g, stmt.cm_tok])
        if lhs1 != rhs1:
            return self._reject(EquationMismatchError("linear-1"))

        # c C + T2 == j B + l H
        lhs2 = challenge * proof.c + proof.t2
        rhs2 = ctx.group.wsum([j, l], [proof.b, ctx.h])
        if lhs2 != rhs2:
            return self._reject(EquationMismatchError("linear-2"))

        return VerificationResult.accept()


def construct_abc_proof(cm, cm_tok, value, sk, side, context=None, disjunction=None, rng=None):
    """
    Construct an :py:class:`ABCProof` for the commitments ``cm`` and ``cm_tok``.

    See :py:meth:`ABCStmt.prove`.
    """
    return ABCStmt(cm, cm_tok, context=context, disjunction=disjunction).prove(
        value, sk, side, rng=rng
    )


def verify_abc_proof(proof, cm, cm_tok, context=None, disjunction=None):
    """
    Verify an :py:class:`ABCProof` against the commitments ``cm`` and ``cm_tok``.

    Returns:
        VerificationResult: Accepted, or rejected with the reason.
    """
    return ABCStmt(cm, cm_tok, context=context, disjunction=disjunction).verify(proof)
