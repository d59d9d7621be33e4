"""
Prover side of an interactive Schnorr proof.
"""

from zkschnorr.exceptions import (
    InvalidChallengeError,
    InvalidStateError,
    ParameterMismatchError,
)
from zkschnorr.keys import SecretExponent, compute_response
from zkschnorr.messages import Challenge, Commitment, Response
from zkschnorr.session import ProverState, SessionStateMachine, statement_hash
from zkschnorr.utils import ensure_bn


class Prover(SessionStateMachine):
    """
    The prover in one Schnorr proof session.

    A prover object runs exactly one session. Start a new prover for every proof; provers for the
    same key can run concurrently since they share only immutable data.

    >>> from zkschnorr.group import GroupParameters
    >>> from zkschnorr.keys import KeyPair
    >>> params = GroupParameters(23, 4, q=11)
    >>> prover = Prover(params, KeyPair.from_secret(params, 6))
    >>> prover.begin_session(randomizer=3).r
    GroupElement(18)
    >>> prover.respond(5).s
    0

    Args:
        params: Group, shared with the verifier.
        keypair (:py:class:`zkschnorr.keys.KeyPair`): Prover key.
        clock: Callable returning the current time in seconds.
    """

    initial_state = ProverState.IDLE
    aborted_state = ProverState.ABORTED
    terminal_states = frozenset([ProverState.RESPONSE_SENT, ProverState.ABORTED])
    transitions = {
        (ProverState.IDLE, "commit"): ProverState.COMMITMENT_SENT,
        (ProverState.COMMITMENT_SENT, "respond"): ProverState.RESPONSE_SENT,
    }

    def __init__(self, params, keypair, **kwargs):
        if keypair.params != params:
            raise ParameterMismatchError("Key pair belongs to a different group")
        super().__init__(**kwargs)
        self.params = params
        self.keypair = keypair
        self.stmt_hash = statement_hash(params, keypair.public_key())
        self._nonce = None

    def begin_session(self, randomizer=None):
        """
        Construct the commitment :math:`R = k G` for a fresh random :math:`k`.

        Args:
            randomizer: Optional value of :math:`k`. Only meant for reproducing test vectors: a
                nonce that is reused with two different challenges reveals the secret.

        Returns:
            :py:class:`zkschnorr.messages.Commitment`

        Raises:
            InvalidStateError: If the session already started.
        """
        next_state = self._expect("commit")
        if randomizer is None:
            randomizer = self.params.random_exponent()
        self._nonce = SecretExponent(randomizer)
        commitment = Commitment(
            r=self._nonce.public(self.params), stmt_hash=self.stmt_hash
        )
        self._enter(next_state)
        return commitment

    def respond(self, challenge):
        """
        Compute the response :math:`s = k + c x \\bmod q` and erase :math:`k`.

        Args:
            challenge: A :py:class:`zkschnorr.messages.Challenge` or an integer.

        Returns:
            :py:class:`zkschnorr.messages.Response`

        Raises:
            InvalidStateError: If no commitment was sent, or the session is finished.
            InvalidChallengeError: If the challenge is not in :math:`[0, q - 1]`. The session is
                aborted.
        """
        next_state = self._expect("respond")
        c = challenge.c if isinstance(challenge, Challenge) else challenge
        try:
            c = ensure_bn(c)
        except (TypeError, ValueError) as e:
            self._fail()
            raise InvalidChallengeError("Malformed challenge") from e
        if not 0 <= c <= self.params.order() - 1:
            self._fail()
            raise InvalidChallengeError("Challenge outside of [0, q - 1]")

        try:
            s = compute_response(
                self._nonce, c, self.keypair.secret, self.params.order()
            )
        except InvalidStateError:
            self._fail()
            raise
        self._release()
        self._enter(next_state)
        return Response(s=s)

    def _release(self):
        if self._nonce is not None:
            self._nonce.wipe()
            self._nonce = None

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        self.abort()
