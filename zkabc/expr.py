"""
Linear expressions of secrets and group elements, the right-hand sides of discrete-logarithm
statements.

>>> from zkabc.utils import make_generators
>>> g, h = make_generators(2)
>>> x, r = Secret(3), Secret(5)
>>> expr = x * g + r * h
>>> expr.eval() == 3 * g + 5 * h
True
"""

import struct
import hashlib

from zkabc.exceptions import InvalidExpression, IncompleteValuesError
from zkabc.utils import ensure_bn


class Expression:
    """
    Arithmetic expression :math:`x_0 G_0 + x_1 G_1 + ... + x_n G_n`, where :math:`x_i`-s are
    secrets.

    Args:
        secret (Secret): Secret object.
        base: Base point on an elliptic curve.
    """

    def __init__(self, secret, base):
        if not isinstance(secret, Secret):
            raise InvalidExpression(
                "In {0} * {1}, the first parameter should be a Secret".format(secret, base)
            )
        self._secrets = [secret]
        self._bases = [base]

    def __add__(self, other):
        if not isinstance(other, Expression):
            raise InvalidExpression(
                "Invalid expression. Only linear combinations of group elements are supported."
            )
        result = Expression.__new__(Expression)
        result._secrets = self._secrets + other._secrets
        result._bases = self._bases + other._bases
        return result

    @property
    def secrets(self):
        return tuple(self._secrets)

    @property
    def bases(self):
        return tuple(self._bases)

    def eval(self):
        """Evaluate the expression, if all secret values are available."""
        for secret in self._secrets:
            if secret.value is None:
                raise IncompleteValuesError(
                    "Secret {0} does not have a value".format(secret.name)
                )
        group = self._bases[0].group
        return group.wsum([ensure_bn(s.value) for s in self._secrets], list(self._bases))

    def __repr__(self):
        return " + ".join(
            "Expression({}, {})".format(secret, base)
            for secret, base in zip(self._secrets, self._bases)
        )


class Secret:
    """
    A secret value in a zero-knowledge proof.

    Args:
        value: Optional secret value.
        name: String to enforce as name of the Secret. Useful for debugging.
    """

    # Number of bytes in a randomly-generated name of a secret.
    NUM_NAME_BYTES = 8

    def __init__(self, value=None, name=None):
        if name is None:
            name = self._generate_unique_name()
        self.name = name
        self.value = value

    def _generate_unique_name(self):
        h = struct.pack(">q", super().__hash__())
        return hashlib.sha256(h).hexdigest()[: self.NUM_NAME_BYTES * 4]

    def __mul__(self, base):
        """
        Construct an expression that represents this secret multiplied by the base.
        """
        return Expression(self, base)

    __rmul__ = __mul__

    def __repr__(self):
        if self.value is None:
            return "Secret(name={})".format(repr(self.name))
        return "Secret({}, {})".format(self.value, repr(self.name))

    def __hash__(self):
        return hash(("Secret", self.name))

    def __eq__(self, other):
        return isinstance(other, Secret) and self.name == other.name and self.value == other.value


def wsum_secrets(secrets, bases):
    """
    Build expression representing a dot product of given secrets and bases.

    >>> from zkabc.utils import make_generators
    >>> x, y = Secret(), Secret()
    >>> g, h = make_generators(2)
    >>> expr = wsum_secrets([x, y], [g, h])
    >>> expr.secrets == (x, y)
    True

    Args:
        secrets: :py:class:`Secret` objects :math:`x_i`
        bases: Elliptic curve points :math:`G_i`
    """
    if len(secrets) != len(bases):
        raise ValueError("Should have as many secrets as bases.")

    result = secrets[0] * bases[0]
    for secret, base in zip(secrets[1:], bases[1:]):
        result = result + secret * base
    return result
