import pytest

from petlib.bn import Bn

from zkschnorr.consts import DEFAULT_GROUP_NAME
from zkschnorr.ec import EcGroupParameters
from zkschnorr.exceptions import InvalidParametersError, ParameterGenerationError
from zkschnorr.group import (
    AVAILABLE_GROUPS,
    GroupElement,
    GroupParameters,
    get_named_group,
    validate,
)
from zkschnorr.utils import ladder_pow


@pytest.mark.parametrize(
    "p,g,q,expected",
    [
        (23, 4, 11, True),
        (23, 4, None, True),
        (23, 2, 11, True),
        # Quadratic non-residue, order 22.
        (23, 5, 11, False),
        # Identity and order 2.
        (23, 1, 11, False),
        (23, 22, 11, False),
        # Out of range.
        (23, 27, 11, False),
        # Not prime.
        (21, 4, None, False),
        # q does not divide p - 1.
        (23, 4, 7, False),
    ],
)
def test_validate(p, g, q, expected):
    assert validate(p, g, q) == expected


def test_invalid_parameters_raise():
    with pytest.raises(InvalidParametersError):
        GroupParameters(23, 5, q=11)


def test_unchecked_parameters_can_be_checked_later():
    params = GroupParameters(23, 5, q=11, check=False)
    assert not params.validate()
    with pytest.raises(InvalidParametersError):
        params.check()


def test_generate_schnorr_group():
    params = GroupParameters.generate(256, subgroup_bits=64)
    assert params.p.num_bits() == 256
    assert params.q.num_bits() == 64
    assert params.validate()


def test_generate_safe_prime_group():
    params = GroupParameters.generate(128, safe=True)
    assert params.p == 2 * params.q + 1
    assert params.validate()


@pytest.mark.parametrize("kwargs", [{"subgroup_bits": 64}, {"safe": True}])
def test_generate_respects_max_trials(kwargs):
    with pytest.raises(ParameterGenerationError):
        GroupParameters.generate(256, max_trials=0, **kwargs)


def test_generate_rejects_oversized_subgroup():
    with pytest.raises(ValueError):
        GroupParameters.generate(64, subgroup_bits=63)


def test_named_groups():
    for name in AVAILABLE_GROUPS:
        params = get_named_group(name)
        assert params is get_named_group(name)
        assert params.is_member(params.generator())


def test_modp2048_is_valid():
    params = get_named_group("modp2048")
    assert params.p.num_bits() == 2048
    assert params.validate()


def test_default_group():
    assert get_named_group() == get_named_group(DEFAULT_GROUP_NAME)
    assert DEFAULT_GROUP_NAME in AVAILABLE_GROUPS


def test_unknown_group():
    with pytest.raises(KeyError):
        get_named_group("modp1")


@pytest.mark.parametrize("exponent", [0, 1, 2, 5, 10, 11, 12, 100])
def test_exp_matches_pow(toy_group, exponent):
    elem = toy_group.exp(toy_group.generator(), exponent)
    assert int(elem) == pow(4, exponent % 11, 23)


def test_ladder_matches_mod_pow():
    p = Bn.get_prime(256, safe=0)
    for _ in range(10):
        base, exponent = p.random(), p.random()
        assert ladder_pow(base, exponent, p, 256) == base.mod_pow(exponent, p)


def test_ladder_rejects_long_exponent():
    with pytest.raises(ValueError):
        ladder_pow(Bn(4), Bn(16), Bn(23), 4)


def test_additive_notation(toy_group):
    g = toy_group.generator()
    assert 3 * g + 5 * g == 8 * g
    assert 3 * g - 3 * g == toy_group.infinite()
    assert 11 * g == toy_group.infinite()


def test_check_element(toy_group):
    assert toy_group.check_element(toy_group.element(1))
    assert toy_group.check_element(toy_group.element(22))
    assert not toy_group.check_element(toy_group.element(0))
    assert not toy_group.check_element(toy_group.element(23))
    assert not toy_group.check_element(toy_group.element(-1))


def test_is_member(toy_group):
    # 2 is a quadratic residue modulo 23, 5 is not.
    assert toy_group.is_member(toy_group.element(2))
    assert not toy_group.is_member(toy_group.element(5))


def test_element_from_other_group(toy_group):
    other = GroupParameters(47, 4, q=23)
    assert not toy_group.check_element(GroupElement(Bn(2), other))


def test_random_exponents(toy_group):
    values = {int(toy_group.random_exponent()) for _ in range(500)}
    assert values == set(range(1, 11))
    values = {int(toy_group.random_scalar()) for _ in range(500)}
    assert values == set(range(0, 11))


def test_challenge_space(toy_group, schnorr_group):
    assert toy_group.challenge_space(128) == 11
    assert schnorr_group.challenge_space(128) == Bn(2).pow(128)


def test_encoding(schnorr_group):
    data = schnorr_group.to_bytes()
    decoded = GroupParameters.from_bytes(data)
    assert decoded == schnorr_group
    assert decoded.fingerprint() == schnorr_group.fingerprint()
    assert hash(decoded) == hash(schnorr_group)


def test_decoding_rejects_garbage():
    with pytest.raises(InvalidParametersError):
        GroupParameters.from_bytes(b"\x00\x00\x00\x05\x01")


def test_decoding_validates():
    data = GroupParameters(23, 5, q=11, check=False).to_bytes()
    with pytest.raises(InvalidParametersError):
        GroupParameters.from_bytes(data)


def test_fingerprints_differ():
    a = get_named_group("modp2048")
    b = get_named_group("secp256r1")
    c = EcGroupParameters(713)
    assert len({a.fingerprint(), b.fingerprint(), c.fingerprint()}) == 3


def test_ec_elements():
    params = get_named_group("secp256r1")
    g = params.generator()
    assert params.check_element(g)
    assert not params.check_element(params.infinite())
    assert params.element(g.export()) == g
    with pytest.raises(ValueError):
        params.element(b"garbage")
