"""
Composable proof statements, and the or-composition of sigma protocols.
"""

import abc
import copy
from hashlib import sha256

from petlib.pack import encode

from zkabc.base import Prover, Verifier, SimulationTranscript
from zkabc.utils import random_scalar, sum_bn_array
from zkabc.exceptions import (
    GroupMismatchError,
    IncompleteValuesError,
    InconsistentChallengeError,
    VerificationError,
)


def _find_residual_challenge(subchallenges, challenge, modulus):
    r"""
    Determine the complement to a global challenge in a list.

    For example, to find :math:`c_1` such that :math:`c = c_1 + c_2 + c_3 \mod N`, we compute
    :math:`c - (c_2 + c_3)`.

    Args:
        subchallenges: The array of subchallenges :math:`c_2, c_3, ...`
        challenge: The global challenge to reach
        modulus: The group order :math:`N`
    """
    return (challenge - sum_bn_array(subchallenges, modulus)) % modulus


def _assign_secret_ids(secret_vars):
    """
    Assign consecutive identifiers to secrets.

    >>> from zkabc.expr import Secret
    >>> x, y = Secret(name='x'), Secret(name='y')
    >>> _assign_secret_ids([x, y, x])
    {'x': 0, 'y': 1}
    """
    secret_id_map = {}
    for secret in secret_vars:
        if secret.name not in secret_id_map:
            secret_id_map[secret.name] = len(secret_id_map)
    return secret_id_map


class ComposableProofStmt(metaclass=abc.ABCMeta):
    """
    A composable sigma-protocol proof statement.

    Subclasses provide ``get_bases``, ``get_secret_vars``, ``get_prover``,
    ``recompute_commitment`` and ``simulate_proof``.
    """

    verifier_cls = Verifier

    @abc.abstractmethod
    def get_bases(self):
        """Collect all base points in this subtree."""

    @abc.abstractmethod
    def get_secret_vars(self):
        """Collect all secrets in this subtree."""

    @abc.abstractmethod
    def get_prover(self, secrets_dict=None):
        """
        Get the :py:class:`base.Prover` for the current proof, or None if secrets are missing.
        """

    @abc.abstractmethod
    def recompute_commitment(self, challenge, responses):
        """
        Compute a pseudo-commitment.

        A pseudo-commitment is the commitment a verifier should have received if the proof was
        correct.

        Raises:
            VerificationError: If the responses are malformed.
        """

    @abc.abstractmethod
    def simulate_proof(self, challenge=None):
        """Return a :py:class:`base.SimulationTranscript` for the given challenge."""

    @property
    def group(self):
        return self.get_bases()[0].group

    @property
    def order(self):
        return self.group.order()

    def get_proof_id(self, secret_id_map=None):
        """
        Identifier for the proof statement, used to seed the Fiat-Shamir hash.

        Returns:
            list: Objects that can be hashed.
        """
        secret_vars = self.get_secret_vars()
        if secret_id_map is None:
            secret_id_map = _assign_secret_ids(secret_vars)
        ordered_secret_ids = [secret_id_map[s.name] for s in secret_vars]
        return [self.__class__.__name__, list(self.get_bases()), ordered_secret_ids]

    def prehash_statement(self):
        """
        Return a hash object seeded with the proof's ID.
        """
        return sha256(encode(self.get_proof_id()))

    def get_verifier(self):
        return self.verifier_cls(self)

    def prove(self, secrets_dict=None):
        """
        Generate the transcript of a non-interactive proof.

        Raises:
            IncompleteValuesError: If the secrets needed by the proof are not known.
        """
        prover = self.get_prover(secrets_dict)
        if prover is None:
            raise IncompleteValuesError("Missing secret values to construct the proof")
        return prover.get_nizk_proof()

    def verify(self, nizk):
        """
        Verify a non-interactive proof.

        Returns:
            VerificationResult: Accepted, or rejected with the reason.
        """
        return self.get_verifier().verify_nizk(nizk)

    def __or__(self, other):
        """
        Make a disjunction of proof statements using :py:class:`OrProofStmt`.

        Subproofs are flattened so that only one :py:class:`OrProofStmt` remains at the root.
        """
        left = self.subproofs if isinstance(self, OrProofStmt) else [self]
        right = other.subproofs if isinstance(other, OrProofStmt) else [other]
        return OrProofStmt(*left, *right)

    def __repr__(self):
        return str(self.get_proof_id())


class OrProofStmt(ComposableProofStmt):
    """
    A disjunction of several subproofs.

    Only one of the subproofs is proven for real; the others are simulated with challenges drawn
    at random, and the true one receives the residual challenge.

    Args:
        subproofs: Proof statements.

    Raises:
        ValueError: If less than two subproofs given.
        GroupMismatchError: If the subproofs live in groups of different orders.
    """

    def __init__(self, *subproofs):
        if len(subproofs) < 2:
            raise ValueError("Need at least two subproofs")

        # Shallow copies, so that simulations and the real proof do not share state.
        self.subproofs = [copy.copy(p) for p in subproofs]

        ref_order = self.subproofs[0].order
        for sub in self.subproofs[1:]:
            if sub.order != ref_order:
                raise GroupMismatchError("Subproofs live in groups of different orders")

    def get_bases(self):
        bases = []
        for sub in self.subproofs:
            bases.extend(sub.get_bases())
        return bases

    def get_secret_vars(self):
        secret_vars = []
        for sub in self.subproofs:
            secret_vars.extend(sub.get_secret_vars())
        return secret_vars

    def get_proof_id(self, secret_id_map=None):
        if secret_id_map is None:
            secret_id_map = _assign_secret_ids(self.get_secret_vars())
        proof_ids = [sub.get_proof_id(secret_id_map) for sub in self.subproofs]
        return [self.__class__.__name__, proof_ids]

    def recompute_commitment(self, challenge, responses):
        # The sub-challenges travel in the responses tuple.
        or_challenges, sub_responses = responses
        if len(or_challenges) != len(self.subproofs) or len(sub_responses) != len(
            self.subproofs
        ):
            raise VerificationError("Or-proof responses do not match the number of subproofs")

        if sum_bn_array(or_challenges, self.order) != challenge % self.order:
            raise InconsistentChallengeError("Inconsistent challenges.")

        return [
            sub.recompute_commitment(sub_challenge, sub_resp)
            for sub, sub_challenge, sub_resp in zip(
                self.subproofs, or_challenges, sub_responses
            )
        ]

    def get_prover(self, secrets_dict=None, chosen_idx=None):
        """
        Get a prover that proves the subproof ``chosen_idx`` and simulates the others.

        Args:
            secrets_dict: Mapping from secrets to their values.
            chosen_idx: Index of the subproof to prove. If None, the first subproof whose secrets
                are all known is picked.

        Returns:
            :py:class:`OrProver` or None: None if no subproof can be proven.
        """
        if secrets_dict is None:
            secrets_dict = {}

        if chosen_idx is not None:
            candidates = [chosen_idx]
        else:
            candidates = range(len(self.subproofs))

        for index in candidates:
            subprover = self.subproofs[index].get_prover(secrets_dict)
            if subprover is not None:
                return OrProver(self, subprover, index)
        return None

    def prove(self, secrets_dict=None, chosen_idx=None):
        prover = self.get_prover(secrets_dict, chosen_idx)
        if prover is None:
            raise IncompleteValuesError("No subproof of the or-proof can be proven")
        return prover.get_nizk_proof()

    def simulate_proof(self, challenge=None):
        # Simulate the n-1 first subproofs, then the last one with the residual challenge.
        order = self.order
        if challenge is None:
            challenge = random_scalar(order)

        transcripts = [
            sub.simulate_proof(challenge=random_scalar(order)) for sub in self.subproofs[:-1]
        ]
        or_chals = [tr.challenge for tr in transcripts]
        final_chal = _find_residual_challenge(or_chals, challenge, order)
        transcripts.append(self.subproofs[-1].simulate_proof(challenge=final_chal))

        return SimulationTranscript(
            commitment=[tr.commitment for tr in transcripts],
            challenge=challenge,
            responses=(or_chals + [final_chal], [tr.responses for tr in transcripts]),
        )


class OrProver(Prover):
    """
    Prover for the or-proof.

    Built with only one subprover and the index of the corresponding subproof in its mother proof.
    Runs the simulations for the other subproofs on construction and stores them.
    """

    def __init__(self, stmt, subprover, true_prover_idx):
        super().__init__(stmt, subprover.secret_values)
        self.subprover = subprover
        self.true_prover_idx = true_prover_idx
        self.setup_simulations()

    def setup_simulations(self):
        order = self.stmt.order
        self.simulations = {
            index: subproof.simulate_proof(challenge=random_scalar(order))
            for index, subproof in enumerate(self.stmt.subproofs)
            if index != self.true_prover_idx
        }

    def internal_commit(self, randomizers_dict=None):
        commitment = []
        for index in range(len(self.stmt.subproofs)):
            if index == self.true_prover_idx:
                commitment.append(self.subprover.internal_commit(randomizers_dict))
            else:
                commitment.append(self.simulations[index].commitment)
        return commitment

    def compute_response(self, challenge):
        """
        Compute the residual challenge for the true subprover and gather all responses.

        Returns:
            tuple: The ordered list of subchallenges and the ordered list of responses.
        """
        residual_chal = _find_residual_challenge(
            [sim.challenge for sim in self.simulations.values()], challenge, self.stmt.order
        )
        challenges = []
        responses = []
        for index in range(len(self.stmt.subproofs)):
            if index == self.true_prover_idx:
                challenges.append(residual_chal)
                responses.append(self.subprover.compute_response(residual_chal))
            else:
                challenges.append(self.simulations[index].challenge)
                responses.append(self.simulations[index].responses)
        return (challenges, responses)
