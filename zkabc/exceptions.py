"""
Common exception classes.

Verification never raises these for an invalid proof: they are carried inside a
:py:class:`zkabc.base.VerificationResult` instead.
"""


class IncompleteValuesError(Exception):
    """Cannot evaluate an expression as not all secret values are set."""


class InvalidExpression(Exception):
    pass


class GroupMismatchError(Exception):
    """Points or generators come from different groups."""


class RandomnessError(Exception):
    """The entropy source failed to produce a scalar."""


class InvalidInputError(Exception):
    """Prover inputs are inconsistent, e.g., the side does not match the value."""


class SubProofError(Exception):
    """The disjunctive sub-proof failed to generate or to verify."""


class VerificationError(Exception):
    """A proof failed a cryptographic check."""


class InconsistentChallengeError(VerificationError):
    """Or-proof sub-challenges do not add up to the global challenge."""


class ChallengeMismatchError(VerificationError):
    """Recomputed and stored challenge values do not match."""


class EquationMismatchError(VerificationError):
    """One of the verification equations does not hold."""

    def __init__(self, equation, message=None):
        self.equation = equation
        if message is None:
            message = "Verification equation {} does not hold".format(equation)
        super().__init__(message)
