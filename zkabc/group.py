"""
Group context: the curve, the Pedersen bases :math:`G` and :math:`H`, and the scalar helpers bound
to the group order :math:`N`.

A context is an immutable value. Pass it explicitly to use several groups side by side.

>>> ctx = GroupContext.from_group()
>>> com = ctx.pedersen_commit(3, 5)
>>> com == 3 * ctx.g + 5 * ctx.h
True
"""

import functools
import logging

import attr
from petlib.ec import EcPt

from zkabc.base import build_fiat_shamir_challenge
from zkabc.consts import DEFAULT_GROUP, GENERATOR_SEED
from zkabc.exceptions import GroupMismatchError
from zkabc.utils import ensure_bn, mod_inverse_or_zero, random_scalar

log = logging.getLogger(__name__)


def _check_bases(instance, attribute, value):
    if not isinstance(value, EcPt):
        raise TypeError("Expected an EcPt for {}. Got: {}".format(attribute.name, value))
    if value.group != instance.group:
        raise GroupMismatchError(
            "Base {} does not belong to the context group".format(attribute.name)
        )


@attr.s(frozen=True)
class GroupContext:
    """
    Fixed generators and order of a prime-order group.

    Args:
        group (petlib.ec.EcGroup): The group.
        g: First Pedersen base :math:`G`.
        h: Second Pedersen base :math:`H`, with an unknown discrete logarithm in base :math:`G`.
    """

    group = attr.ib()
    g = attr.ib(validator=_check_bases)
    h = attr.ib(validator=_check_bases)

    def __attrs_post_init__(self):
        if self.g == self.h:
            raise ValueError("The Pedersen bases G and H must differ")

    @classmethod
    def from_group(cls, group=None, seed=GENERATOR_SEED):
        """
        Build a context using the group generator as :math:`G` and a hashed point as :math:`H`.
        """
        if group is None:
            group = DEFAULT_GROUP
        return cls(group=group, g=group.generator(), h=group.hash_to_point(seed))

    @property
    def order(self):
        return self.group.order()

    def random_scalar(self):
        """
        Draw a scalar uniformly at random from :math:`[0, N)`.

        Raises:
            RandomnessError: If the entropy source fails.
        """
        return random_scalar(self.order)

    def pedersen_commit(self, value, randomness):
        """Pedersen commitment :math:`v G + r H`."""
        return self.group.wsum([ensure_bn(value), ensure_bn(randomness)], [self.g, self.h])

    def inverse(self, x):
        """Inverse modulo the group order. The inverse of zero is zero."""
        return mod_inverse_or_zero(x, self.order)

    def hash_to_scalar(self, *elements):
        """Fiat-Shamir hash of the given elements, reduced modulo the group order."""
        return build_fiat_shamir_challenge(None, self.order, *elements)


@functools.lru_cache(maxsize=None)
def default_group_context():
    """Context over :py:data:`zkabc.consts.DEFAULT_GROUP`."""
    log.debug("Building default group context")
    return GroupContext.from_group()
