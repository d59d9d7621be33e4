"""
Non-interactive proof bound to a message, on an elliptic curve:
SPK{ (x): y = x * g }(message)
"""

from zkschnorr import KeyPair, get_named_group, prove_nizk, verify_nizk

params = get_named_group("secp256r1")
keypair = KeyPair.generate(params)

message = "transfer 10 coins to bob"
nizk = prove_nizk(keypair, message=message)
assert verify_nizk(params, keypair.public_key(), nizk, message=message)

# The proof does not carry over to another message.
forged = "transfer 99 coins to eve"
assert not verify_nizk(params, keypair.public_key(), nizk, message=forged)
