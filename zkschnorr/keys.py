"""
Long-term keys and secret exponents.

Secret exponents are wrapped in :py:class:`SecretExponent`, which has no ``petlib.pack`` coder,
refuses pickling and hides its value in ``repr``. The only operations it offers are the ones
the protocol needs: deriving a public element and combining into a response.
"""

import logging

import attr

from zkschnorr.exceptions import InvalidParametersError, InvalidStateError
from zkschnorr.utils import ensure_bn

logger = logging.getLogger(__name__)


class SecretExponent:
    """
    A secret exponent in :math:`[1, q - 1]` that can be erased.

    Can be used as a context manager, in which case the value is erased on exit.

    Args:
        value: The exponent.
    """

    __slots__ = ("_value",)

    def __init__(self, value):
        self._value = ensure_bn(value)

    @property
    def erased(self):
        return self._value is None

    def _get(self):
        if self._value is None:
            raise InvalidStateError("Secret has been erased")
        return self._value

    def public(self, group, base=None):
        """Compute ``value * base``, by default with the group generator as base."""
        if base is None:
            base = group.generator()
        return group.exp(base, self._get())

    def in_range(self, group):
        return 1 <= self._get() <= group.order() - 1

    def wipe(self):
        """Drop the reference to the value. Further use raises ``InvalidStateError``."""
        self._value = None

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        self.wipe()

    def __repr__(self):
        return "SecretExponent(<erased>)" if self.erased else "SecretExponent(<hidden>)"

    def __reduce__(self):
        raise TypeError("Secret exponents cannot be serialized")


def compute_response(nonce, challenge, secret, order):
    """
    Compute the Schnorr response :math:`s = k + c x \\bmod q`.

    Args:
        nonce (SecretExponent): Ephemeral exponent :math:`k`.
        challenge: Challenge :math:`c`.
        secret (SecretExponent): Long-term secret :math:`x`.
        order: Group order :math:`q`.
    """
    order = ensure_bn(order)
    return (nonce._get() + ensure_bn(challenge).mod_mul(secret._get(), order)) % order


@attr.s(repr=False, eq=False)
class KeyPair:
    """
    Prover key pair :math:`(x, y = x G)`.

    Use :py:meth:`generate` or :py:meth:`from_secret` rather than the constructor.

    Attributes:
        params: Group the key lives in.
        secret (SecretExponent): Secret exponent. Never leaves the prover.
        y: Public key.
    """

    params = attr.ib()
    secret = attr.ib(validator=attr.validators.instance_of(SecretExponent))
    y = attr.ib()

    @classmethod
    def generate(cls, params):
        """Draw :math:`x` uniformly from :math:`[1, q - 1]` and derive the public key."""
        secret = SecretExponent(params.random_exponent())
        return cls(params=params, secret=secret, y=secret.public(params))

    @classmethod
    def from_secret(cls, params, x):
        """
        Import an existing secret exponent.

        Raises:
            InvalidParametersError: If :math:`x` is not in :math:`[1, q - 1]`.
        """
        secret = x if isinstance(x, SecretExponent) else SecretExponent(x)
        if not secret.in_range(params):
            raise InvalidParametersError("Secret exponent out of range")
        return cls(params=params, secret=secret, y=secret.public(params))

    def public_key(self):
        return self.y

    def get_prover(self):
        """Get a prover for a single proof session with this key."""
        from zkschnorr.prover import Prover

        return Prover(self.params, self)

    def wipe(self):
        """Erase the secret exponent, e.g., on key rotation."""
        self.secret.wipe()
        logger.debug("Key pair secret erased")

    def __repr__(self):
        return "KeyPair(y={!r})".format(self.y)
