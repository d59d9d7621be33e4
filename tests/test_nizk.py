import pytest

from petlib.pack import encode, decode

from zkschnorr.exceptions import ParameterMismatchError
from zkschnorr.keys import KeyPair
from zkschnorr.nizk import NIZK, prove_nizk, verify_nizk


def test_nizk(group):
    keypair = KeyPair.generate(group)
    nizk = prove_nizk(keypair)
    assert verify_nizk(group, keypair.public_key(), nizk)


def test_nizk_with_message(group):
    keypair = KeyPair.generate(group)
    nizk = prove_nizk(keypair, message="mymessage")
    assert verify_nizk(group, keypair.public_key(), nizk, message="mymessage")
    assert not verify_nizk(group, keypair.public_key(), nizk, message="other")
    assert not verify_nizk(group, keypair.public_key(), nizk)


def test_nizk_tampered_response(group):
    keypair = KeyPair.generate(group)
    nizk = prove_nizk(keypair)
    nizk.response = (nizk.response + 1) % group.order()
    assert not verify_nizk(group, keypair.public_key(), nizk)


def test_nizk_out_of_range(toy_group):
    keypair = KeyPair.from_secret(toy_group, 6)
    nizk = prove_nizk(keypair)
    nizk.response = nizk.response + 11
    assert not verify_nizk(toy_group, keypair.public_key(), nizk)


def test_nizk_wrong_key(group):
    keypair = KeyPair.generate(group)
    other = KeyPair.generate(group)
    nizk = prove_nizk(keypair)
    with pytest.raises(ParameterMismatchError):
        verify_nizk(group, other.public_key(), nizk)

    nizk.stmt_hash = None
    assert not verify_nizk(group, other.public_key(), nizk)


def test_nizk_deterministic_with_randomizer(toy_group):
    keypair = KeyPair.from_secret(toy_group, 6)
    a = prove_nizk(keypair, randomizer=3)
    b = prove_nizk(keypair, randomizer=3)
    assert a == b
    assert a.response == (3 + a.challenge * 6) % 11


def test_nizk_serialization(group):
    keypair = KeyPair.generate(group)
    nizk = prove_nizk(keypair, message="hello")
    decoded = decode(encode(nizk))
    assert isinstance(decoded, NIZK)
    assert decoded == nizk
    assert verify_nizk(group, keypair.public_key(), decoded, message="hello")


def test_nizk_challenge_reduced(toy_group):
    keypair = KeyPair.from_secret(toy_group, 6)
    for k in range(1, 11):
        nizk = prove_nizk(keypair, randomizer=k)
        assert 0 <= nizk.challenge < 11
        assert verify_nizk(toy_group, keypair.public_key(), nizk)
