"""
Non-interactive Schnorr proofs using the Fiat-Shamir heuristic.

The challenge is a hash of the statement (group and public key), the commitment, and an optional
message, so the prover cannot choose the commitment after seeing the challenge. Passing a
message turns the proof into a signature of knowledge on that message.

>>> from zkschnorr.group import GroupParameters
>>> from zkschnorr.keys import KeyPair
>>> params = GroupParameters(23, 4, q=11)
>>> keypair = KeyPair.from_secret(params, 6)
>>> nizk = prove_nizk(keypair, message="login")
>>> verify_nizk(params, keypair.public_key(), nizk, message="login")
True
"""

import hashlib

import attr

from petlib.bn import Bn
from petlib.pack import encode, decode, register_coders

from zkschnorr.exceptions import ParameterMismatchError
from zkschnorr.keys import SecretExponent, compute_response
from zkschnorr.session import statement_hash
from zkschnorr.utils import ensure_bn


@attr.s
class NIZK:
    """
    Non-interactive zero-knowledge proof.

    The commitment is not included: the verifier recomputes it from the challenge and the
    response.
    """

    challenge = attr.ib(converter=ensure_bn)
    response = attr.ib(converter=ensure_bn)
    stmt_hash = attr.ib(default=None)


def build_fiat_shamir_challenge(prehash, *args, message=""):
    """
    Generate a Fiat-Shamir challenge.

    >>> prehash = hashlib.sha256(b"statement id")
    >>> isinstance(build_fiat_shamir_challenge(prehash, Bn(42)), Bn)
    True

    Args:
        prehash: Hash object seeded with the statement hash.
        args: Items to hash (e.g., commitments).
        message: Message to make it a signature of knowledge.
    """
    for elem in args:
        if not isinstance(elem, bytes) and not isinstance(elem, str):
            encoded = encode(elem)
        elif isinstance(elem, str):
            encoded = elem.encode()
        else:
            encoded = elem
        prehash.update(encoded)

    prehash.update(message.encode())
    return Bn.from_hex(prehash.hexdigest())


def _challenge(params, stmt_hash, commitment, message):
    prehash = hashlib.sha256(stmt_hash)
    c = build_fiat_shamir_challenge(
        prehash, params.encode_element(commitment), message=message
    )
    return c % params.order()


def prove_nizk(keypair, message="", randomizer=None):
    """
    Construct a non-interactive proof of knowledge of the secret key.

    Args:
        keypair (:py:class:`zkschnorr.keys.KeyPair`): Prover key.
        message (str): Optional message to make a signature of knowledge.
        randomizer: Optional nonce, only meant for reproducing test vectors.

    Returns:
        :py:class:`NIZK`
    """
    params = keypair.params
    stmt_hash = statement_hash(params, keypair.public_key())
    if randomizer is None:
        randomizer = params.random_exponent()
    with SecretExponent(randomizer) as nonce:
        commitment = nonce.public(params)
        challenge = _challenge(params, stmt_hash, commitment, message)
        response = compute_response(nonce, challenge, keypair.secret, params.order())
    return NIZK(challenge=challenge, response=response, stmt_hash=stmt_hash)


def verify_nizk(params, public_key, nizk, message=""):
    """
    Verify a non-interactive proof.

    Recomputes the commitment :math:`R' = s G - c Y` and checks that hashing it yields the
    challenge of the proof.

    Args:
        params: Group.
        public_key: Public key of the prover.
        nizk (:py:class:`NIZK`): Non-interactive proof.
        message: The message, if a signature of knowledge.

    Returns:
        bool: True if verification succeeded, False otherwise.

    Raises:
        ParameterMismatchError: If the proof was made for another group or public key.
    """
    y = params.element(public_key)
    stmt_hash = statement_hash(params, y)
    if nizk.stmt_hash is not None and nizk.stmt_hash != stmt_hash:
        raise ParameterMismatchError("Proof statement does not match")

    q = params.order()
    if not 0 <= nizk.response < q or not 0 <= nizk.challenge < q:
        return False
    if not params.is_member(y):
        return False

    commitment_prime = params.exp(params.generator(), nizk.response) + params.exp(
        y, -nizk.challenge
    )
    challenge_prime = _challenge(params, stmt_hash, commitment_prime, message)
    return nizk.challenge == challenge_prime


def enc_NIZK(obj):
    return encode([obj.challenge, obj.response, obj.stmt_hash])


def dec_NIZK(data):
    challenge, response, stmt_hash = decode(data)
    return NIZK(challenge=challenge, response=response, stmt_hash=stmt_hash)


register_coders(NIZK, 27, enc_NIZK, dec_NIZK)
