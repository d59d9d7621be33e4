"""
Walk through the protocol in the order-11 subgroup of Z_23^*, generated by 4.

x = 6, y = 4^6 mod 23 = 2
k = 3, r = 4^3 mod 23 = 18
c = 5, s = 3 + 5 * 6 mod 11 = 0
Check: 4^0 = 1 = 18 * 2^5 mod 23
"""

from zkschnorr import GroupParameters, KeyPair, ReplayWindow, Verifier

params = GroupParameters(23, 4, q=11)
keypair = KeyPair.from_secret(params, 6)
assert int(keypair.public_key()) == 2

prover = keypair.get_prover()
verifier = Verifier(params, keypair.public_key(), ReplayWindow())

# Fixed nonce and challenge, to reproduce the numbers above. Never do this outside of tests.
commitment = prover.begin_session(randomizer=3)
assert int(commitment.r) == 18

challenge = verifier.receive_commitment(commitment, challenge=5)
response = prover.respond(challenge)
assert response.s == 0

assert verifier.verify(response).accepted
