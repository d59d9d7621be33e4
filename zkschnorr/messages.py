"""
Messages exchanged during a proof session.

The transport is external. These records only fix the content of the three moves and the final
result, and provide a ``petlib.pack`` encoding for them:

>>> from zkschnorr.group import GroupParameters
>>> params = GroupParameters(23, 4, q=11)
>>> msg = Commitment(r=params.element(18))
>>> decode_message(encode_message(msg)) == msg
True
"""

import attr

from petlib.pack import encode, decode, register_coders

from zkschnorr.utils import ensure_bn


@attr.s
class Commitment:
    """
    First move, prover to verifier.

    Attributes:
        r: Commitment :math:`r = k G`.
        stmt_hash: Hash of the group and public key the prover is using.
    """

    r = attr.ib()
    stmt_hash = attr.ib(default=None)


@attr.s
class Challenge:
    """Second move, verifier to prover."""

    c = attr.ib(converter=ensure_bn)


@attr.s
class Response:
    """Third move, prover to verifier."""

    s = attr.ib(converter=ensure_bn)


@attr.s
class Result:
    """
    Outcome of a proof session, available to the verifier's caller.

    A rejected proof is a valid outcome, not an error.
    """

    accepted = attr.ib()

    def __bool__(self):
        return bool(self.accepted)


MESSAGE_TYPES = (Commitment, Challenge, Response, Result)


def encode_message(msg):
    if not isinstance(msg, MESSAGE_TYPES):
        raise TypeError("Not a protocol message: {!r}".format(msg))
    return encode(msg)


def decode_message(data):
    """
    Decode a protocol message.

    Raises:
        ValueError: If the data does not hold a protocol message.
    """
    msg = decode(data)
    if not isinstance(msg, MESSAGE_TYPES):
        raise ValueError("Not a protocol message")
    return msg


def enc_Commitment(obj):
    return encode([obj.r, obj.stmt_hash])


def dec_Commitment(data):
    r, stmt_hash = decode(data)
    return Commitment(r=r, stmt_hash=stmt_hash)


def enc_Challenge(obj):
    return encode(obj.c)


def dec_Challenge(data):
    return Challenge(c=decode(data))


def enc_Response(obj):
    return encode(obj.s)


def dec_Response(data):
    return Response(s=decode(data))


def enc_Result(obj):
    return encode(bool(obj.accepted))


def dec_Result(data):
    return Result(accepted=decode(data))


register_coders(Commitment, 23, enc_Commitment, dec_Commitment)
register_coders(Challenge, 24, enc_Challenge, dec_Challenge)
register_coders(Response, 25, enc_Response, dec_Response)
register_coders(Result, 26, enc_Result, dec_Result)
