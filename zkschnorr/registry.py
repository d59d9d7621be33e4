"""
Public-key registries.

The proof engine does not manage identities. It only needs to look up the public key of a
prover, through any object implementing :py:class:`PublicKeyRegistry`.
"""

import abc
import logging
import threading

from zkschnorr.exceptions import InvalidParametersError, UnknownIdentityError

logger = logging.getLogger(__name__)


class PublicKeyRegistry(metaclass=abc.ABCMeta):
    """Abstract mapping from prover identities to public keys."""

    @abc.abstractmethod
    def lookup(self, identity):
        """
        Get the public key of a prover.

        Raises:
            UnknownIdentityError: If no key is registered for ``identity``.
        """
        pass


class InMemoryRegistry(PublicKeyRegistry):
    """
    Registry backed by a dictionary. Useful for tests and examples.

    Args:
        params: Group the registered keys must belong to.
    """

    def __init__(self, params):
        self.params = params
        self._keys = {}
        self._lock = threading.Lock()

    def register(self, identity, public_key):
        """
        Register or replace the public key of ``identity``.

        Raises:
            InvalidParametersError: If the key is not a member of the group.
        """
        y = self.params.element(public_key)
        if not self.params.is_member(y) or y == self.params.infinite():
            raise InvalidParametersError("Public key is not a valid group element")
        with self._lock:
            self._keys[identity] = y
        logger.debug("Registered public key for %s", identity)

    def lookup(self, identity):
        with self._lock:
            try:
                return self._keys[identity]
            except KeyError:
                raise UnknownIdentityError(identity) from None

    def remove(self, identity):
        with self._lock:
            try:
                del self._keys[identity]
            except KeyError:
                raise UnknownIdentityError(identity) from None

    def __contains__(self, identity):
        with self._lock:
            return identity in self._keys
