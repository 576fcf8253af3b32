from hashlib import sha256

import pytest

from petlib.bn import Bn
from petlib.pack import encode

from zkabc.base import VerificationResult, build_fiat_shamir_challenge
from zkabc.exceptions import ChallengeMismatchError, EquationMismatchError, VerificationError


def test_verification_result_accept():
    result = VerificationResult.accept()
    assert result
    assert result.error is None
    result.raise_for_error()


def test_verification_result_reject_carries_error():
    result = VerificationResult.reject(EquationMismatchError("linear-2"))
    assert not result
    assert result.error.equation == "linear-2"
    with pytest.raises(VerificationError):
        result.raise_for_error()


def test_challenge_is_reduced(group):
    g = group.generator()
    c = build_fiat_shamir_challenge(sha256(b"id"), group.order(), g, [2 * g, Bn(5)], "msg")
    assert isinstance(c, Bn)
    assert 0 <= c < group.order()


def test_challenge_items_are_framed(group):
    order = group.order()
    assert build_fiat_shamir_challenge(None, order, b"1", b"23") != build_fiat_shamir_challenge(
        None, order, b"12", b"3"
    )


def test_challenge_hashes_packed_elements(group):
    g = group.generator()
    items = [g, [2 * g, Bn(5)], "msg"]
    prehash = sha256()
    for item in items:
        prehash.update(encode(item))
    expected = Bn.from_binary(prehash.digest()) % group.order()
    assert build_fiat_shamir_challenge(None, group.order(), *items) == expected


def test_challenge_mismatch_is_verification_error():
    assert issubclass(ChallengeMismatchError, VerificationError)
