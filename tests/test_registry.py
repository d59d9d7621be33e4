import pytest

from zkschnorr.exceptions import InvalidParametersError, UnknownIdentityError
from zkschnorr.keys import KeyPair
from zkschnorr.registry import InMemoryRegistry, PublicKeyRegistry


def test_register_and_lookup(group):
    registry = InMemoryRegistry(group)
    keypair = KeyPair.generate(group)
    registry.register("alice", keypair.public_key())
    assert "alice" in registry
    assert registry.lookup("alice") == keypair.public_key()


def test_unknown_identity(toy_group):
    registry = InMemoryRegistry(toy_group)
    with pytest.raises(UnknownIdentityError):
        registry.lookup("bob")
    with pytest.raises(UnknownIdentityError):
        registry.remove("bob")


def test_remove(toy_group):
    registry = InMemoryRegistry(toy_group)
    registry.register("alice", 2)
    registry.remove("alice")
    assert "alice" not in registry


@pytest.mark.parametrize("y", [1, 5, 0])
def test_register_invalid_key(toy_group, y):
    registry = InMemoryRegistry(toy_group)
    with pytest.raises(InvalidParametersError):
        registry.register("alice", y)


def test_abstract_registry():
    with pytest.raises(TypeError):
        PublicKeyRegistry()
