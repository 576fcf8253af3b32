import pytest

from petlib.bn import Bn
from petlib.ec import EcGroup

from zkabc.group import GroupContext, default_group_context
from zkabc.consts import DEFAULT_GROUP, GENERATOR_SEED
from zkabc.exceptions import GroupMismatchError, RandomnessError


def test_context_bases(context, group):
    assert context.g == group.generator()
    assert context.h == group.hash_to_point(GENERATOR_SEED)
    assert context.g != context.h
    assert context.order == group.order()


def test_default_context_is_cached():
    ctx = default_group_context()
    assert ctx is default_group_context()
    assert ctx.group == DEFAULT_GROUP


def test_contexts_over_different_curves_are_independent():
    ctx1 = GroupContext.from_group(EcGroup(714))
    ctx2 = GroupContext.from_group(EcGroup(713))
    assert ctx1.order != ctx2.order
    assert ctx1 != ctx2


def test_context_rejects_equal_bases(group):
    g = group.generator()
    with pytest.raises(ValueError):
        GroupContext(group=group, g=g, h=g)


def test_context_rejects_foreign_bases(group):
    other = EcGroup(415)
    with pytest.raises(GroupMismatchError):
        GroupContext(group=group, g=group.generator(), h=other.generator())


def test_pedersen_commit(context):
    com = context.pedersen_commit(3, 5)
    assert com == 3 * context.g + 5 * context.h
    assert context.pedersen_commit(0, 5) == 5 * context.h


def test_inverse(context):
    x = Bn(12345)
    assert (context.inverse(x) * x) % context.order == 1


def test_inverse_of_zero_is_zero(context):
    assert context.inverse(0) == 0
    assert context.inverse(context.order) == 0


def test_random_scalar_in_range(context):
    for _ in range(10):
        u = context.random_scalar()
        assert 0 <= u < context.order


def test_random_scalar_failure_raises_randomness_error(group, monkeypatch):
    class BrokenOrder:
        def random(self):
            raise RuntimeError("entropy exhausted")

    ctx = GroupContext.from_group(group)
    monkeypatch.setattr(GroupContext, "order", property(lambda self: BrokenOrder()))
    with pytest.raises(RandomnessError):
        ctx.random_scalar()


def test_hash_to_scalar_is_deterministic(context):
    points = [context.g, context.h, 7 * context.g]
    assert context.hash_to_scalar(*points) == context.hash_to_scalar(*points)
    assert context.hash_to_scalar(*points) < context.order


def test_hash_to_scalar_depends_on_order_of_elements(context):
    assert context.hash_to_scalar(context.g, context.h) != context.hash_to_scalar(
        context.h, context.g
    )
