import copy
import pickle

import pytest

from petlib.pack import encode

from zkschnorr.exceptions import (
    InvalidParametersError,
    InvalidStateError,
    ParameterMismatchError,
)
from zkschnorr.keys import KeyPair, SecretExponent, compute_response
from zkschnorr.prover import Prover


def test_generate(group):
    keypair = KeyPair.generate(group)
    assert keypair.secret.in_range(group)
    assert group.is_member(keypair.public_key())
    assert keypair.public_key() == keypair.secret.public(group)


def test_from_secret(toy_group):
    keypair = KeyPair.from_secret(toy_group, 6)
    assert int(keypair.public_key()) == 2


@pytest.mark.parametrize("x", [0, 11, -1, 12])
def test_from_secret_out_of_range(toy_group, x):
    with pytest.raises(InvalidParametersError):
        KeyPair.from_secret(toy_group, x)


def test_secret_is_hidden(toy_group):
    keypair = KeyPair.from_secret(toy_group, 6)
    assert "6" not in repr(keypair.secret)
    assert "hidden" in repr(keypair.secret)
    assert "secret" not in repr(keypair)


def test_secret_cannot_be_serialized(toy_group):
    keypair = KeyPair.from_secret(toy_group, 6)
    with pytest.raises(TypeError):
        pickle.dumps(keypair.secret)
    with pytest.raises(TypeError):
        pickle.dumps(keypair)
    with pytest.raises(TypeError):
        copy.copy(keypair.secret)
    with pytest.raises(Exception):
        encode(keypair.secret)


def test_secret_wipe():
    secret = SecretExponent(5)
    secret.wipe()
    assert secret.erased
    assert "erased" in repr(secret)
    with pytest.raises(InvalidStateError):
        compute_response(SecretExponent(1), 1, secret, 11)


def test_secret_context_manager(toy_group):
    with SecretExponent(3) as k:
        assert int(k.public(toy_group)) == 18
    assert k.erased


def test_compute_response():
    assert compute_response(SecretExponent(3), 5, SecretExponent(6), 11) == 0
    assert compute_response(SecretExponent(3), 0, SecretExponent(6), 11) == 3


def test_get_prover(toy_group):
    keypair = KeyPair.from_secret(toy_group, 6)
    assert isinstance(keypair.get_prover(), Prover)


def test_prover_requires_same_group(toy_group, schnorr_group):
    keypair = KeyPair.generate(schnorr_group)
    with pytest.raises(ParameterMismatchError):
        Prover(toy_group, keypair)


def test_wiped_key_cannot_respond(toy_group):
    keypair = KeyPair.from_secret(toy_group, 6)
    prover = keypair.get_prover()
    prover.begin_session()
    keypair.wipe()
    with pytest.raises(InvalidStateError):
        prover.respond(1)
    assert prover.done
