"""
Prime-order subgroups of the multiplicative group of integers modulo a prime.

:py:class:`GroupParameters` mimics :py:class:`petlib.ec.EcGroup` and :py:class:`GroupElement`
mimics :py:class:`petlib.ec.EcPt`, so that all protocol code is written in additive notation and
runs unchanged over elliptic curves. In additive notation, :math:`g^x \\bmod p` is written
``x * g`` and the group operation is ``+``.

Example:

>>> params = GroupParameters(23, 4, q=11)
>>> y = params.exp(params.generator(), 6)
>>> y
GroupElement(2)
>>> params.check_element(y)
True
"""

import functools
import hashlib
import logging

from petlib.bn import Bn
from petlib.pack import encode, decode, register_coders

from zkschnorr.consts import (
    DEFAULT_GROUP_NAME,
    DEFAULT_MAX_TRIALS,
    DEFAULT_SUBGROUP_BITS,
)
from zkschnorr.ec import EcGroupParameters, NAMED_CURVES
from zkschnorr.exceptions import (
    InvalidParametersError,
    ParameterGenerationError,
)
from zkschnorr.utils import (
    ensure_bn,
    int_div,
    ladder_pow,
    random_in_range,
    encode_ints,
    decode_ints,
    encode_int,
)

logger = logging.getLogger(__name__)


# RFC 3526, 2048-bit MODP group (group 14). Safe prime, 2 generates the subgroup of quadratic
# residues of order (p - 1) / 2.
MODP_2048_PRIME = Bn.from_hex(
    "FFFFFFFFFFFFFFFFC90FDAA22168C234C4C6628B80DC1CD1"
    "29024E088A67CC74020BBEA63B139B22514A08798E3404DD"
    "EF9519B3CD3A431B302B0A6DF25F14374FE1356D6D51C245"
    "E485B576625E7EC6F44C42E9A637ED6B0BFF5CB6F406B7ED"
    "EE386BFB5A899FA5AE9F24117C4B1FE649286651ECE45B3D"
    "C2007CB8A163BF0598DA48361C55D39A69163FA8FD24CF5F"
    "83655D23DCA3AD961C62F356208552BB9ED529077096966D"
    "670C354E4ABC9804F1746C08CA18217C32905E462E36CE3B"
    "E39E772C180E86039B2783A2EC07A28FB5C55DF06F4C52C9"
    "DE2BCBF6955817183995497CEA956AE515D2261898FA0510"
    "15728E5A8AACAA68FFFFFFFFFFFFFFFF"
)
MODP_2048_GENERATOR = Bn(2)


def validate(p, g, q=None):
    """
    Check that :math:`g` generates a subgroup of prime order :math:`q` modulo the prime :math:`p`.

    If :math:`q` is not given, :math:`p` is treated as a safe prime and :math:`q = (p - 1) / 2`.

    Since :math:`q` is prime, :math:`g^q = 1` together with :math:`g \\neq 1` pins the order of
    :math:`g` to exactly :math:`q`, which rules out generators of small order or of an order
    that shares factors with the cofactor.

    >>> validate(23, 4, 11)
    True
    >>> validate(23, 5, 11)
    False
    >>> validate(23, 1)
    False

    Returns:
        bool: True if the parameters are valid.
    """
    p, g = ensure_bn(p), ensure_bn(g)
    if p < 5 or not p.is_prime():
        return False

    q = int_div(p - 1, 2) if q is None else ensure_bn(q)
    if q < 2 or not q.is_prime():
        return False
    if (p - 1) % q != 0:
        return False

    if g < 2 or g > p - 2:
        return False
    return g.mod_pow(q, p) == 1


class GroupParameters:
    """
    Description of a cyclic group of prime order :math:`q` inside :math:`\\mathbb{Z}_p^*`.

    Instances are immutable and compared by value: two parties hold the same group exactly when
    their :py:meth:`fingerprint` values match.

    Args:
        p: Prime modulus.
        g: Generator of the subgroup of order ``q``.
        q: Prime order of the subgroup. Defaults to ``(p - 1) / 2``.
        check (bool): Validate the parameters, raising
            :py:class:`zkschnorr.exceptions.InvalidParametersError` on failure.
    """

    def __init__(self, p, g, q=None, check=True):
        self._p = ensure_bn(p)
        self._g = ensure_bn(g)
        self._q = int_div(self._p - 1, 2) if q is None else ensure_bn(q)
        if check:
            self.check()
        self._num_bits = self._q.num_bits()

    @property
    def p(self):
        return self._p

    @property
    def q(self):
        return self._q

    @property
    def g(self):
        return self._g

    @classmethod
    def from_values(cls, p, g, q=None):
        """Build validated parameters from plain integers."""
        return cls(p, g, q=q, check=True)

    @classmethod
    def generate(
        cls, bits, subgroup_bits=None, safe=False, max_trials=DEFAULT_MAX_TRIALS
    ):
        """
        Generate fresh group parameters.

        With ``safe=True``, draw a safe prime :math:`p = 2q + 1` and use the subgroup of quadratic
        residues. Otherwise draw a prime :math:`q` of ``subgroup_bits`` bits and search for an
        even cofactor :math:`m` such that :math:`p = mq + 1` is a prime of exactly ``bits`` bits
        (a Schnorr group).

        Args:
            bits: Bit length of the modulus.
            subgroup_bits: Bit length of the subgroup order (Schnorr groups only).
            safe (bool): Generate a safe-prime group.
            max_trials: Number of candidates to try before giving up. For safe primes, each
                trial is one OpenSSL prime search whose result is checked.

        Raises:
            ParameterGenerationError: If no suitable prime is found.
        """
        if safe:
            for _ in range(max_trials):
                try:
                    p = Bn.get_prime(bits, safe=1)
                except Exception as e:
                    raise ParameterGenerationError(
                        "Could not draw a {}-bit safe prime".format(bits)
                    ) from e
                q = int_div(p - 1, 2)
                if p.num_bits() == bits and q.is_prime():
                    break
            else:
                raise ParameterGenerationError(
                    "No {}-bit safe prime after {} trials".format(bits, max_trials)
                )
            cofactor = Bn(2)
        else:
            if subgroup_bits is None:
                subgroup_bits = DEFAULT_SUBGROUP_BITS
            cofactor_bits = bits - subgroup_bits
            if cofactor_bits < 2:
                raise ValueError(
                    "Subgroup of {} bits does not fit in a {}-bit modulus".format(
                        subgroup_bits, bits
                    )
                )
            q = Bn.get_prime(subgroup_bits, safe=0)
            low = Bn(2).pow(cofactor_bits - 2)
            high = Bn(2).pow(cofactor_bits - 1) - 1
            for _ in range(max_trials):
                cofactor = random_in_range(low, high) * 2
                p = cofactor * q + 1
                if p.num_bits() == bits and p.is_prime():
                    break
            else:
                raise ParameterGenerationError(
                    "No {}-bit prime of the form m * q + 1 after {} trials".format(
                        bits, max_trials
                    )
                )

        for _ in range(max(max_trials, 1)):
            h = random_in_range(2, p - 2)
            g = h.mod_pow(cofactor, p)
            if g != 1:
                break
        else:
            raise ParameterGenerationError("Could not find a generator")

        logger.debug(
            "Generated group: %d-bit modulus, %d-bit subgroup order",
            p.num_bits(),
            q.num_bits(),
        )
        return cls(p, g, q=q)

    def validate(self):
        """Return True if the parameters are valid. See :py:func:`validate`."""
        return validate(self._p, self._g, self._q)

    def check(self):
        """
        Validate the parameters.

        Raises:
            InvalidParametersError: If validation fails.
        """
        if not self.validate():
            raise InvalidParametersError(
                "Invalid group parameters: p={}, g={}, q={}".format(
                    self._p, self._g, self._q
                )
            )

    def order(self):
        return self._q

    def generator(self):
        return GroupElement(self._g, self)

    def infinite(self):
        """Neutral element (named after its elliptic-curve counterpart)."""
        return GroupElement(Bn(1), self)

    def element(self, value):
        """
        Wrap an integer as an element of this group, without any checks.

        Use :py:meth:`check_element` or :py:meth:`is_member` on untrusted values.
        """
        if isinstance(value, GroupElement):
            return value
        return GroupElement(ensure_bn(value), self)

    def check_element(self, elem):
        """Check that the element lies in :math:`[1, p - 1]`."""
        if not isinstance(elem, GroupElement) or elem.group != self:
            return False
        return 1 <= elem.value <= self._p - 1

    def is_member(self, elem):
        """Check that the element is in range and belongs to the subgroup of order :math:`q`."""
        return self.check_element(elem) and elem.value.mod_pow(self._q, self._p) == 1

    def exp(self, base, exponent):
        """
        Raise an element to a power, that is, compute ``exponent * base``.

        The exponent is reduced modulo :math:`q` and processed by a Montgomery ladder over the
        fixed bit length of :math:`q`, so the sequence of operations does not depend on the
        exponent value.
        """
        if isinstance(base, GroupElement):
            base = base.value
        e = int(exponent) % int(self._q)
        return GroupElement(ladder_pow(base, e, self._p, self._num_bits), self)

    def random_exponent(self):
        """Uniformly random exponent in :math:`[1, q - 1]`."""
        return random_in_range(1, self._q - 1)

    def random_scalar(self):
        """Uniformly random exponent in :math:`[0, q - 1]`."""
        return self._q.random()

    def challenge_space(self, bits):
        """Size of the challenge space for ``bits``-bit challenges, capped by the group order."""
        return min(self._q, Bn(2).pow(bits))

    def encode_element(self, elem):
        return encode_int(elem.value)

    def to_bytes(self):
        """Canonical encoding: ``p``, ``q``, ``g`` as length-prefixed big-endian integers."""
        return encode_ints(self._p, self._q, self._g)

    @classmethod
    def from_bytes(cls, data, check=True):
        try:
            p, q, g = decode_ints(data, 3)
        except ValueError as e:
            raise InvalidParametersError("Malformed group encoding") from e
        return cls(p, g, q=q, check=check)

    def fingerprint(self):
        return hashlib.sha256(b"modp" + self.to_bytes()).digest()

    def __eq__(self, other):
        if not isinstance(other, GroupParameters):
            return NotImplemented
        return (self._p, self._q, self._g) == (other._p, other._q, other._g)

    def __hash__(self):
        return hash(self.fingerprint())

    def __repr__(self):
        return "GroupParameters(p={}, g={}, q={})".format(self._p, self._g, self._q)


class GroupElement:
    """
    Element of a :py:class:`GroupParameters` group, in additive notation.

    Args:
        value: Integer representative in :math:`[0, p - 1]`.
        group (GroupParameters): Group.
    """

    def __init__(self, value, group):
        self.value = value
        self.group = group

    def __add__(self, other):
        return GroupElement(
            self.value.mod_mul(other.value, self.group.p), self.group
        )

    def __rmul__(self, other):
        return self.group.exp(self, other)

    def __neg__(self):
        return GroupElement(self.value.mod_inverse(self.group.p), self.group)

    def __sub__(self, other):
        return self + (-other)

    def __int__(self):
        return int(self.value)

    def __eq__(self, other):
        if not isinstance(other, GroupElement):
            return NotImplemented
        return self.value == other.value and self.group == other.group

    def __hash__(self):
        return hash(self.value.binary())

    def __repr__(self):
        return "GroupElement({})".format(self.value)


@functools.lru_cache(maxsize=None)
def get_named_group(name=DEFAULT_GROUP_NAME):
    """
    Look up a standard group by name.

    Available names are listed in ``AVAILABLE_GROUPS``, in order of preference. Without a name,
    returns the ``DEFAULT_GROUP_NAME`` group.

    Raises:
        KeyError: If the name is unknown.
    """
    if name == "modp2048":
        return GroupParameters(MODP_2048_PRIME, MODP_2048_GENERATOR, check=False)
    if name in NAMED_CURVES:
        return EcGroupParameters(NAMED_CURVES[name])
    raise KeyError("Unknown group: {}".format(name))


AVAILABLE_GROUPS = ["modp2048"] + list(NAMED_CURVES)


def enc_GroupParameters(obj):
    return obj.to_bytes()


def dec_GroupParameters(data):
    return GroupParameters.from_bytes(data, check=False)


def enc_GroupElement(obj):
    return encode([obj.value, obj.group])


def dec_GroupElement(data):
    d = decode(data)
    return GroupElement(d[0], d[1])


register_coders(GroupParameters, 20, enc_GroupParameters, dec_GroupParameters)
register_coders(GroupElement, 21, enc_GroupElement, dec_GroupElement)
