import pytest

from petlib.ec import EcGroup

from zkabc.group import GroupContext


# secp256k1 and secp224r1
@pytest.fixture(params=[714, 713], ids=["secp256k1", "secp224r1"])
def group(request):
    return EcGroup(request.param)


@pytest.fixture
def context(group):
    return GroupContext.from_group(group)
