import pytest

from zkabc.base import NIZK
from zkabc.exceptions import InvalidInputError, SubProofError
from zkabc.primitives.disjunctive import Side, DisjunctiveStmt, SchnorrDisjunction
from zkabc.utils import make_generators


@pytest.fixture
def bases(group):
    return make_generators(2, group)


@pytest.mark.parametrize("side", [Side.LEFT, Side.RIGHT])
def test_disjunctive_completeness(group, bases, side):
    b1, b2 = bases
    witness = group.order().random()
    unrelated = group.hash_to_point(b"unrelated")
    y1 = witness * b1 if side is Side.LEFT else unrelated
    y2 = witness * b2 if side is Side.RIGHT else unrelated

    stmt = DisjunctiveStmt(b1, y1, b2, y2)
    nizk = stmt.prove(witness, side)
    assert stmt.verify(nizk)
    assert DisjunctiveStmt(b1, y1, b2, y2).verify(nizk)


def test_disjunctive_both_branches_true(bases):
    b1, b2 = bases
    stmt = DisjunctiveStmt(b1, 9 * b1, b2, 9 * b2)
    assert stmt.verify(stmt.prove(9, Side.LEFT))
    assert stmt.verify(stmt.prove(9, Side.RIGHT))


def test_disjunctive_wrong_witness(bases):
    b1, b2 = bases
    stmt = DisjunctiveStmt(b1, 7 * b1, b2, 3 * b2)
    with pytest.raises(SubProofError):
        stmt.prove(3, Side.LEFT)


def test_disjunctive_invalid_side(bases):
    b1, b2 = bases
    stmt = DisjunctiveStmt(b1, 7 * b1, b2, 3 * b2)
    with pytest.raises(InvalidInputError):
        stmt.prove(7, "left")


def test_disjunctive_rejects_other_statement(bases):
    b1, b2 = bases
    nizk = DisjunctiveStmt(b1, 7 * b1, b2, 3 * b2).prove(7, Side.LEFT)
    assert not DisjunctiveStmt(b1, 8 * b1, b2, 3 * b2).verify(nizk)
    assert not DisjunctiveStmt(b2, 3 * b2, b1, 7 * b1).verify(nizk)


def test_disjunctive_rejects_malformed_proof(bases):
    b1, b2 = bases
    stmt = DisjunctiveStmt(b1, 7 * b1, b2, 3 * b2)

    result = stmt.verify("not a proof")
    assert not result
    assert isinstance(result.error, SubProofError)

    nizk = stmt.prove(7, Side.LEFT)
    result = stmt.verify(NIZK(challenge=nizk.challenge, responses=None))
    assert not result
    assert isinstance(result.error, SubProofError)


def test_schnorr_disjunction_interface(bases):
    b1, b2 = bases
    disjunction = SchnorrDisjunction()
    proof = disjunction.generate(b1, 7 * b1, b2, 3 * b2, 3, Side.RIGHT)
    assert disjunction.verify(b1, 7 * b1, b2, 3 * b2, proof)
    assert not disjunction.verify(b1, 7 * b1, b2, 4 * b2, proof)
