r"""
ZK proof for linear representations of discrete logarithms, our basic building block.

An example of such proof is :math:`PK\{ (x_0, x_1): Y = x_0 G_0 + x_1 G_1 \}`, where :math:`x_0` and
:math:`x_1` are secret integers modulo the group order, :math:`G_0` and :math:`G_1` are points on
the same elliptic curve, and :math:`Y` is the value of the expression.

See "`Proof Systems for General Statements about Discrete Logarithms`_" by Camenisch and Stadler,
1997 for the details.

.. _`Proof Systems for General Statements about Discrete Logarithms`:
    ftp://ftp.inf.ethz.ch/pub/crypto/publications/CamSta97b.pdf

"""

from zkabc.base import Prover, SimulationTranscript
from zkabc.expr import Expression
from zkabc.utils import ensure_bn, random_scalar
from zkabc.composition import ComposableProofStmt
from zkabc.exceptions import InvalidExpression, VerificationError


class DLRep(ComposableProofStmt):
    r"""
    Proof statement for a discrete-logarithm representation proof.

    .. math::
        PK\{ (x_0, x_1, ..., x_n): Y = x_0 G_0 + x_1 G_1 + ... + x_n G_n \}

    Example usage for :math:`PK\{x: Y = x G \}`:

    >>> from petlib.ec import EcGroup
    >>> from zkabc.expr import Secret
    >>> x = Secret(name="x")
    >>> g = EcGroup().generator()
    >>> stmt = DLRep(42 * g, x * g)
    >>> nizk = stmt.prove({x: 42})
    >>> bool(stmt.verify(nizk))
    True

    Args:
        lhs: "Left-hand side." Value of :math:`Y`.
        expr (:py:class:`zkabc.expr.Expression`): Right-hand side, e.g. ``Secret() * g``.
    """

    def __init__(self, lhs, expr):
        if not isinstance(expr, Expression):
            raise TypeError("Expected an Expression. Got: {}".format(expr))
        self.bases = list(expr.bases)
        self.secret_vars = list(expr.secrets)

        test_group = self.bases[0].group
        for g in self.bases:
            if g.group != test_group:
                raise InvalidExpression("All bases should come from the same group", g.group)
        if lhs.group != test_group:
            raise InvalidExpression("The left-hand side should come from the bases' group")

        self.lhs = lhs

    def get_bases(self):
        return self.bases

    def get_secret_vars(self):
        return self.secret_vars

    def get_proof_id(self, secret_id_map=None):
        return super().get_proof_id(secret_id_map) + [self.lhs]

    def get_prover(self, secrets_dict=None):
        """
        Get a prover for the current proof statement.

        Args:
            secrets_dict: Optional mapping from secrets to their values. Values already set on the
                :py:class:`zkabc.expr.Secret` objects are used too.

        Returns:
            :py:class:`DLRepProver` or None: Prover object if all secret values are known.
        """
        secret_values = {sec: sec.value for sec in self.secret_vars if sec.value is not None}
        if secrets_dict:
            secret_values.update(secrets_dict)

        if any(sec not in secret_values for sec in self.secret_vars):
            return None

        secret_values = {sec: ensure_bn(val) for sec, val in secret_values.items()}
        return DLRepProver(self, secret_values)

    def get_randomizers(self):
        """
        Draw one randomizer per distinct secret.

        Re-occurring secrets get the same randomizer, so they also get the same response.
        """
        order = self.order
        return {sec: random_scalar(order) for sec in set(self.secret_vars)}

    def check_responses_consistency(self, responses):
        """
        Check that re-occurring secrets yield the same responses.
        """
        responses_dict = {}
        for sec, resp in zip(self.secret_vars, responses):
            if responses_dict.setdefault(sec, resp) != resp:
                return False
        return True

    def recompute_commitment(self, challenge, responses):
        if len(responses) != len(self.secret_vars):
            raise VerificationError("Expected {} responses".format(len(self.secret_vars)))
        if not self.check_responses_consistency(responses):
            raise VerificationError("Responses for the same secret do not match")

        order = self.order
        responses = [ensure_bn(resp) for resp in responses]
        neg_challenge = (-ensure_bn(challenge)) % order
        return self.group.wsum(responses, self.bases) + neg_challenge * self.lhs

    def simulate_proof(self, challenge=None, responses_dict=None):
        """
        Simulate a transcript: draw the responses at random and solve for the commitment.

        Args:
            challenge: Optional challenge to use in the simulation.
            responses_dict: Optional mapping from secrets to enforced responses.
        """
        randomizers = self.get_randomizers()
        if responses_dict is not None:
            randomizers.update(responses_dict)
        if challenge is None:
            challenge = random_scalar(self.order)

        responses = [randomizers[sec] for sec in self.secret_vars]
        commitment = self.recompute_commitment(challenge, responses)
        return SimulationTranscript(
            commitment=commitment, challenge=challenge, responses=responses
        )


class DLRepProver(Prover):
    """The prover in a discrete logarithm representation proof."""

    def internal_commit(self, randomizers_dict=None):
        """
        Compute the commitment :math:`k_0 G_0 + ... + k_n G_n` from the randomizers.

        Args:
            randomizers_dict: Optional mapping from secrets to random values. Missing values are
                drawn at random.
        """
        randomizers = self.stmt.get_randomizers()
        if randomizers_dict is not None:
            randomizers.update(randomizers_dict)

        self.ks = [randomizers[sec] for sec in self.stmt.secret_vars]
        return self.stmt.group.wsum(self.ks, self.stmt.bases)

    def compute_response(self, challenge):
        r"""
        For each secret :math:`x` and its randomizer :math:`k`, the response is
        :math:`k + c x \mod N`.
        """
        order = self.stmt.order
        return [
            (k + self.secret_values[sec] * challenge) % order
            for sec, k in zip(self.stmt.secret_vars, self.ks)
        ]
