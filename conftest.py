import pytest

from zkschnorr.group import GroupParameters, get_named_group


# Order-11 subgroup of Z_23^*. Small enough to enumerate.
TOY_GROUP = GroupParameters(23, 4, q=11)


@pytest.fixture(scope="session")
def schnorr_group():
    return GroupParameters.generate(512, subgroup_bits=160)


@pytest.fixture(params=["schnorr", "modp2048", "secp256r1"])
def group(request, schnorr_group):
    if request.param == "schnorr":
        return schnorr_group
    return get_named_group(request.param)


@pytest.fixture
def toy_group():
    return TOY_GROUP


class FakeClock:
    def __init__(self, now=1000.0):
        self.now = now

    def __call__(self):
        return self.now

    def advance(self, seconds):
        self.now += seconds


@pytest.fixture
def clock():
    return FakeClock()
