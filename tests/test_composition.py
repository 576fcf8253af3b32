import pytest

from petlib.bn import Bn

from zkabc import DLRep, Secret
from zkabc.base import NIZK
from zkabc.composition import OrProofStmt, OrProver
from zkabc.exceptions import (
    GroupMismatchError,
    IncompleteValuesError,
    InconsistentChallengeError,
    RandomnessError,
)
from zkabc.expr import wsum_secrets
from zkabc.utils import make_generators


@pytest.fixture
def params(group):
    generators1 = make_generators(3, group)
    generators2 = make_generators(4, group, seed=100)
    x0, x1, x2, x3, x4, x5 = [Secret() for _ in range(6)]
    secrets_dict = {
        x0: Bn(1),
        x1: Bn(2),
        x2: Bn(5),
        x3: Bn(100),
        x4: Bn(43),
        x5: Bn(10),
    }

    sum_1 = group.wsum([secrets_dict[x] for x in (x0, x1, x2)], generators1)
    sum_2 = group.wsum([secrets_dict[x] for x in (x0, x3, x4, x5)], generators2)
    p1 = DLRep(sum_1, wsum_secrets([x0, x1, x2], generators1))
    p2 = DLRep(sum_2, wsum_secrets([x0, x3, x4, x5], generators2))
    return p1, p2, secrets_dict


def test_or_proof(params):
    p1, p2, secrets = params
    orproof = OrProofStmt(p1, p2, p1, p2, p1, p2)
    tr = orproof.prove(secrets)
    assert orproof.verify(tr)


def test_or_proof_infix_operator(params):
    p1, p2, secrets = params
    orproof = p1 | p2 | p1
    assert isinstance(orproof, OrProofStmt)
    assert len(orproof.subproofs) == 3
    assert orproof.verify(orproof.prove(secrets))


@pytest.mark.parametrize("chosen_idx", [0, 1])
def test_or_proof_chosen_branch(group, chosen_idx):
    g, h = make_generators(2, group)
    x, y = Secret(), Secret()
    # Only the chosen branch holds.
    lhs = [3 * g, 5 * h]
    lhs[1 - chosen_idx] = group.hash_to_point(b"unrelated")
    stmt = OrProofStmt(DLRep(lhs[0], x * g), DLRep(lhs[1], y * h))

    secrets = {x: 3} if chosen_idx == 0 else {y: 5}
    prover = stmt.get_prover(secrets, chosen_idx=chosen_idx)
    assert isinstance(prover, OrProver)
    assert prover.true_prover_idx == chosen_idx
    assert stmt.verify(prover.get_nizk_proof())


def test_or_proof_picks_provable_branch(group):
    g, h = make_generators(2, group)
    x, y = Secret(), Secret()
    stmt = OrProofStmt(DLRep(3 * g, x * g), DLRep(5 * h, y * h))
    prover = stmt.get_prover({y: 5})
    assert prover.true_prover_idx == 1


def test_or_proof_no_secrets(params):
    p1, p2, _ = params
    orproof = OrProofStmt(p1, p2)
    assert orproof.get_prover({}) is None
    with pytest.raises(IncompleteValuesError):
        orproof.prove({})


def test_or_proof_needs_two_subproofs(params):
    p1, _, _ = params
    with pytest.raises(ValueError):
        OrProofStmt(p1)


def test_or_proof_groups_must_match(group):
    from petlib.ec import EcGroup

    other = EcGroup(415)
    x, y = Secret(), Secret()
    g, h = group.generator(), other.generator()
    with pytest.raises(GroupMismatchError):
        OrProofStmt(DLRep(2 * g, x * g), DLRep(2 * h, y * h))


def test_or_proof_inconsistent_subchallenges(params, group):
    p1, p2, secrets = params
    orproof = OrProofStmt(p1, p2)
    tr = orproof.prove(secrets)

    or_challenges, responses = tr.responses
    or_challenges[0] = (or_challenges[0] + 1) % group.order()
    result = orproof.verify(NIZK(challenge=tr.challenge, responses=(or_challenges, responses)))
    assert not result
    assert isinstance(result.error, InconsistentChallengeError)


def test_or_proof_fails_when_no_branch_holds(group):
    g, h = make_generators(2, group)
    x, y = Secret(), Secret()
    stmt = OrProofStmt(DLRep(3 * g, x * g), DLRep(5 * h, y * h))
    tr = stmt.prove({x: 4})
    assert not stmt.verify(tr)


def test_or_proof_simulation(params):
    p1, p2, _ = params
    orproof = OrProofStmt(p1, p2)
    tr = orproof.simulate_proof()
    assert orproof.recompute_commitment(tr.challenge, tr.responses) == tr.commitment
    assert not orproof.verify(NIZK(challenge=tr.challenge, responses=tr.responses))


def test_or_proof_simulation_randomness_failure(params, monkeypatch):
    class BrokenOrder:
        def random(self):
            raise RuntimeError("entropy exhausted")

    p1, p2, _ = params
    orproof = OrProofStmt(p1, p2)
    monkeypatch.setattr(OrProofStmt, "order", property(lambda self: BrokenOrder()))
    with pytest.raises(RandomnessError):
        orproof.simulate_proof()
