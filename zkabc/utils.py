"""
Helpers for scalars and group elements.
"""

import math
import secrets
import hashlib

from petlib.bn import Bn

from zkabc.consts import DEFAULT_GROUP
from zkabc.exceptions import RandomnessError


def get_random_point(group=None, random_bits=256, seed=None):
    """
    Generate a random group element.

    Args:
        group: Group
        random_bits: Number of bits of a random string to create a point.
        seed: Optional integer or bytes seed to make the point deterministic.

    >>> from petlib.ec import EcPt
    >>> isinstance(get_random_point(), EcPt)
    True
    >>> get_random_point(seed=1) == get_random_point(seed=1)
    True
    """
    if group is None:
        group = DEFAULT_GROUP

    num_bytes = math.ceil(random_bits / 8)
    if seed is None:
        randomness = secrets.token_bytes(num_bytes)
    else:
        if not isinstance(seed, bytes):
            seed = b"%i" % seed
        randomness = hashlib.sha512(seed).digest()[:num_bytes]

    return group.hash_to_point(randomness)


def make_generators(num, group=None, random_bits=256, seed=42):
    """
    Create some group generators.

    .. WARNING ::

        There is a negligible chance that some generators will be the same.

    >>> generators = make_generators(3)
    >>> len(generators)
    3
    """
    if group is None:
        group = DEFAULT_GROUP
    return [
        get_random_point(group, random_bits, seed=seed + i if seed is not None else None)
        for i in range(num)
    ]


def ensure_bn(x):
    """
    Ensure that value is big number.

    >>> isinstance(ensure_bn(42), Bn)
    True
    >>> isinstance(ensure_bn(Bn(42)), Bn)
    True
    """
    if isinstance(x, Bn):
        return x
    return Bn(x)


def sum_bn_array(arr, modulus):
    """
    Sum an array of big numbers under a modulus.

    >>> sum_bn_array([Bn(5), 7], 10)
    2
    """
    modulus = ensure_bn(modulus)
    res = Bn(0)
    for elem in arr:
        res = res.mod_add(ensure_bn(elem), modulus)
    return res


def mod_inverse_or_zero(x, modulus):
    """
    Multiplicative inverse of ``x`` modulo ``modulus``, with the inverse of zero defined as zero.

    >>> mod_inverse_or_zero(0, 11)
    0
    >>> mod_inverse_or_zero(3, 11)
    4
    """
    modulus = ensure_bn(modulus)
    x = ensure_bn(x) % modulus
    if x == 0:
        return Bn(0)
    return x.mod_inverse(modulus)


def random_scalar(order):
    """
    Draw a scalar uniformly at random from :math:`[0, order)`.

    >>> 0 <= random_scalar(Bn(11)) < 11
    True

    Raises:
        RandomnessError: If the entropy source fails.
    """
    try:
        return order.random()
    except Exception as e:
        raise RandomnessError("Failed to draw a random scalar") from e
