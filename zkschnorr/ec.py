"""
Elliptic-curve groups with the same interface as :py:class:`zkschnorr.group.GroupParameters`.

Points are plain :py:class:`petlib.ec.EcPt` objects, which already use additive notation.
Scalar multiplication is delegated to OpenSSL.
"""

import hashlib

from petlib.bn import Bn
from petlib.ec import EcGroup, EcPt
from petlib.pack import register_coders

from zkschnorr.utils import decode_ints, encode_int, random_in_range

# OpenSSL curve identifiers.
NAMED_CURVES = {
    "secp256r1": 415,
    "secp224r1": 713,
}


class EcGroupParameters:
    """
    Prime-order elliptic curve group.

    Args:
        nid: OpenSSL identifier of the curve.
    """

    def __init__(self, nid=NAMED_CURVES["secp256r1"]):
        self.nid = nid
        self.group = EcGroup(nid)
        self._order = self.group.order()

    def order(self):
        return self._order

    def generator(self):
        return self.group.generator()

    def infinite(self):
        return self.group.infinite()

    def element(self, value):
        """
        Wrap a point or decode its binary export, without further checks.

        Raises:
            ValueError: If the bytes do not decode to a point.
        """
        if isinstance(value, EcPt):
            return value
        if not isinstance(value, bytes):
            raise ValueError("Expected a point or its encoding, got {!r}".format(value))
        try:
            return EcPt.from_binary(value, self.group)
        except Exception as e:
            raise ValueError("Invalid point encoding") from e

    def check_element(self, elem):
        """Check that the point is on this curve and is not the point at infinity."""
        if not isinstance(elem, EcPt) or elem.group != self.group:
            return False
        return not elem.is_infinite() and self.group.check_point(elem)

    def is_member(self, elem):
        # Curves in NAMED_CURVES have cofactor 1.
        return self.check_element(elem)

    def exp(self, base, exponent):
        return Bn.from_num(int(exponent) % int(self._order)) * base

    def random_exponent(self):
        return random_in_range(1, self._order - 1)

    def random_scalar(self):
        return self._order.random()

    def challenge_space(self, bits):
        return min(self._order, Bn(2).pow(bits))

    def encode_element(self, elem):
        return elem.export()

    def to_bytes(self):
        return encode_int(self.nid)

    @classmethod
    def from_bytes(cls, data):
        (nid,) = decode_ints(data, 1)
        return cls(int(nid))

    def fingerprint(self):
        return hashlib.sha256(
            b"ec" + self.to_bytes() + self.generator().export()
        ).digest()

    def __eq__(self, other):
        if not isinstance(other, EcGroupParameters):
            return NotImplemented
        return self.nid == other.nid

    def __hash__(self):
        return hash(self.nid)

    def __repr__(self):
        return "EcGroupParameters(nid={})".format(self.nid)


def enc_EcGroupParameters(obj):
    return obj.to_bytes()


def dec_EcGroupParameters(data):
    return EcGroupParameters.from_bytes(data)


register_coders(EcGroupParameters, 22, enc_EcGroupParameters, dec_EcGroupParameters)
