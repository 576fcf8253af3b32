"""
Common classes, including subclassable basic provers and verifiers.
"""

import abc
from hashlib import sha256

import attr
from petlib.bn import Bn
from petlib.pack import encode

from zkabc.exceptions import ChallengeMismatchError, VerificationError


@attr.s
class NIZK:
    """
    Non-interactive zero-knowledge proof.
    """

    challenge = attr.ib()
    responses = attr.ib()


@attr.s
class SimulationTranscript:
    """
    Simulated proof transcript.
    """

    commitment = attr.ib()
    challenge = attr.ib()
    responses = attr.ib()


@attr.s(frozen=True)
class VerificationResult:
    """
    Outcome of a verification: accepted, or rejected with the reason.

    Evaluates to ``True`` only if the proof was accepted.

    >>> bool(VerificationResult.accept())
    True
    >>> result = VerificationResult.reject(ChallengeMismatchError("bad"))
    >>> bool(result), type(result.error).__name__
    (False, 'ChallengeMismatchError')
    """

    valid = attr.ib()
    error = attr.ib(default=None)

    @classmethod
    def accept(cls):
        return cls(valid=True)

    @classmethod
    def reject(cls, error):
        return cls(valid=False, error=error)

    def __bool__(self):
        return self.valid

    def raise_for_error(self):
        """Raise the carried error, if any."""
        if self.error is not None:
            raise self.error


def build_fiat_shamir_challenge(prehash, order, *args):
    """Generate a Fiat-Shamir challenge, reduced modulo ``order``.

    >>> from petlib.ec import EcGroup
    >>> group = EcGroup()
    >>> commitment = 42 * group.generator()
    >>> c = build_fiat_shamir_challenge(sha256(b"statement id"), group.order(), commitment)
    >>> isinstance(c, Bn) and c < group.order()
    True

    Args:
        prehash: Hash object seeded with the proof statement ID, or None for a fresh one.
        order: Group order.
        args: Items to hash (e.g., commitments), each serialized with :py:func:`petlib.pack.encode`.
    """
    if prehash is None:
        prehash = sha256()
    for elem in args:
        prehash.update(encode(elem))
    return Bn.from_binary(prehash.digest()) % order


class Prover(metaclass=abc.ABCMeta):
    """
    Abstract interface representing Prover used in sigma protocols.

    Args:
        stmt: The proof statement from which we draw the Prover.
        secret_values: The values of the secrets as a dict.
    """

    def __init__(self, stmt, secret_values):
        self.stmt = stmt
        self.secret_values = secret_values

    @abc.abstractmethod
    def internal_commit(self, randomizers_dict=None):
        """
        Draw the randomizers and compute the commitment.
        """

    @abc.abstractmethod
    def compute_response(self, challenge):
        """
        Compute the responses associated to each Secret object in the statement.
        """

    def get_nizk_proof(self):
        """
        Construct a non-interactive proof transcript using Fiat-Shamir heuristic.

        The transcript contains only the challenge and the responses, as the commitment can be
        deterministically recomputed.
        """
        commitment = self.internal_commit()
        challenge = build_fiat_shamir_challenge(
            self.stmt.prehash_statement(), self.stmt.order, commitment
        )
        responses = self.compute_response(challenge)
        return NIZK(challenge=challenge, responses=responses)


class Verifier:
    """
    Verifier of non-interactive sigma protocols.

    Relies on the statement being able to recompute the commitment from a challenge and the
    responses.
    """

    def __init__(self, stmt):
        self.stmt = stmt

    def verify_nizk(self, nizk):
        """
        Verify a non-interactive proof.

        Computes a pseudo-commitment and draws a pseudo-challenge from it. Compares the
        pseudo-challenge with the nizk challenge.

        Args:
            nizk (:py:class:`NIZK`): Non-interactive proof

        Return:
            VerificationResult: Accepted, or rejected with the reason.
        """
        try:
            commitment_prime = self.stmt.recompute_commitment(
                nizk.challenge, nizk.responses
            )
        except VerificationError as e:
            return VerificationResult.reject(e)
        challenge_prime = build_fiat_shamir_challenge(
            self.stmt.prehash_statement(), self.stmt.order, commitment_prime
        )
        if nizk.challenge != challenge_prime:
            return VerificationResult.reject(
                ChallengeMismatchError("Recomputed challenge does not match")
            )
        return VerificationResult.accept()
