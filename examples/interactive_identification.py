"""
Interactive identification: a registered user proves knowledge of their secret key.

PK{ (x): y = x * g }
"""

from zkschnorr import KeyPair, ReplayWindow, Verifier, get_named_group
from zkschnorr.registry import InMemoryRegistry

params = get_named_group("modp2048")

# Registration: the user keeps the key pair, the service stores the public key.
keypair = KeyPair.generate(params)
registry = InMemoryRegistry(params)
registry.register("alice", keypair.public_key())

# One replay window for all verifiers of the service.
window = ReplayWindow(window=300)

# Login. Every attempt uses a fresh prover and a fresh verifier.
prover = keypair.get_prover()
verifier = Verifier.for_identity(params, registry, "alice", window)

commitment = prover.begin_session()
challenge = verifier.receive_commitment(commitment)
response = prover.respond(challenge)
result = verifier.verify(response)
assert result.accepted
