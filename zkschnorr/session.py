r"""
Proof sessions: state machines, transcripts, and transcript tools.

A Schnorr proof of knowledge of :math:`x` such that :math:`Y = x G` is a three-move exchange:
the prover commits to :math:`R = k G`, the verifier answers with a random challenge :math:`c`,
and the prover responds with :math:`s = k + c x \bmod q`. The verifier accepts if

.. math::
    s G = R + c Y

This module also contains the two standard tools for reasoning about sigma protocols: a
simulator, which produces valid-looking transcripts without the secret, and an extractor, which
recovers the secret from two transcripts that share a commitment.
"""

import enum
import hashlib
import logging
import time

import attr

from zkschnorr.consts import CHALLENGE_LENGTH
from zkschnorr.exceptions import InvalidStateError
from zkschnorr.utils import ensure_bn

logger = logging.getLogger(__name__)


class ProverState(enum.Enum):
    IDLE = "idle"
    COMMITMENT_SENT = "commitment_sent"
    RESPONSE_SENT = "response_sent"
    ABORTED = "aborted"


class VerifierState(enum.Enum):
    AWAITING_COMMITMENT = "awaiting_commitment"
    AWAITING_RESPONSE = "awaiting_response"
    ACCEPTED = "accepted"
    REJECTED = "rejected"
    ABORTED = "aborted"


class SessionStateMachine:
    """
    Base class for single-use protocol sessions.

    Subclasses declare the transition table as a mapping from ``(state, event)`` pairs to the next
    state. Any event that is not in the table for the current state raises
    :py:class:`zkschnorr.exceptions.InvalidStateError` and makes the session unusable.

    Args:
        clock: Callable returning the current time in seconds.
    """

    initial_state = None
    aborted_state = None
    terminal_states = frozenset()
    transitions = {}

    def __init__(self, clock=time.time):
        self._clock = clock
        self.state = self.initial_state
        self.created_at = clock()
        self.last_activity = self.created_at

    @property
    def done(self):
        return self.state in self.terminal_states

    def _expect(self, event):
        """
        Look up the transition for ``event`` without taking it.

        Returns:
            The next state.

        Raises:
            InvalidStateError: If ``event`` is not allowed in the current state.
        """
        try:
            return self.transitions[(self.state, event)]
        except KeyError:
            pass
        state = self.state
        self._fail()
        raise InvalidStateError(
            "{}: cannot {} in state {}".format(type(self).__name__, event, state.name)
        )

    def _enter(self, state):
        logger.debug("%s: %s -> %s", type(self).__name__, self.state.name, state.name)
        self.state = state
        self.last_activity = self._clock()

    def _release(self):
        """Drop any secret state held by the session."""

    def _fail(self):
        if not self.done:
            self._release()
            self._enter(self.aborted_state)

    def abort(self):
        """
        Cancel the session and release its secrets.

        Does nothing if the session already reached a terminal state.
        """
        if self.done:
            return
        self._fail()
        logger.info("%s aborted", type(self).__name__)

    def is_expired(self, timeout, now=None):
        """
        Check whether the session has been idle for more than ``timeout`` seconds.

        The transport is expected to call :py:meth:`abort` on expired sessions.
        """
        if self.done:
            return False
        if now is None:
            now = self._clock()
        return now - self.last_activity > timeout


@attr.s
class Transcript:
    """
    Record of one proof session.

    Attributes:
        r: Commitment.
        c: Challenge.
        s: Response, or None if the session did not get that far.
        accepted: Verification result, or None before verification.
        stmt_hash: Statement hash sent along with the commitment.
        created_at: Session creation time.
    """

    r = attr.ib()
    c = attr.ib(default=None)
    s = attr.ib(default=None)
    accepted = attr.ib(default=None)
    stmt_hash = attr.ib(default=None)
    created_at = attr.ib(default=None)

    def is_valid(self, params, y):
        """Re-check the verification equation, e.g., during an audit."""
        if self.c is None or self.s is None:
            return False
        return check_equation(params, y, self.r, self.c, self.s)


def check_equation(params, y, r, c, s):
    """
    Check the Schnorr verification equation :math:`s G = R + c Y`.

    >>> from zkschnorr.group import GroupParameters
    >>> params = GroupParameters(23, 4, q=11)
    >>> check_equation(params, params.element(2), params.element(18), 5, 0)
    True
    """
    lhs = params.exp(params.generator(), s)
    rhs = r + params.exp(y, c)
    return lhs == rhs


def random_challenge(params, challenge_bits=CHALLENGE_LENGTH):
    """Uniformly random challenge from the challenge space of ``params``."""
    return params.challenge_space(challenge_bits).random()


def statement_hash(params, y):
    """Hash binding a proof to the group and the public key."""
    h = hashlib.sha256(params.fingerprint())
    h.update(params.encode_element(y))
    return h.digest()


def simulate_transcript(
    params, y, challenge=None, response=None, challenge_bits=CHALLENGE_LENGTH
):
    """
    Simulate an accepting transcript without knowledge of the secret.

    Picks the response and the challenge first, then solves for the commitment
    :math:`R = s G - c Y`. The output is distributed exactly as an honest transcript, which is
    why the protocol reveals nothing about :math:`x` to an honest verifier.

    Args:
        params: Group.
        y: Public key.
        challenge: Optional challenge to enforce.
        response: Optional response to enforce.
    """
    if challenge is None:
        challenge = random_challenge(params, challenge_bits)
    if response is None:
        response = params.random_scalar()
    challenge, response = ensure_bn(challenge), ensure_bn(response)

    r = params.exp(params.generator(), response) + params.exp(y, -challenge)
    return Transcript(r=r, c=challenge, s=response)


def extract_secret(params, first, second):
    """
    Recover the secret from two accepting transcripts that share a commitment.

    With :math:`s_1 = k + c_1 x` and :math:`s_2 = k + c_2 x`, the secret is
    :math:`x = (s_1 - s_2) / (c_1 - c_2) \\bmod q`. This is why a commitment must never be
    answered twice, and why the nonce :math:`k` must never be reused.

    Raises:
        ValueError: If the transcripts do not share a commitment or use the same challenge.
    """
    if first.r != second.r:
        raise ValueError("Transcripts do not share a commitment")

    q = params.order()
    dc = ensure_bn(first.c).mod_sub(ensure_bn(second.c), q)
    if dc == 0:
        raise ValueError("Transcripts use the same challenge")
    ds = ensure_bn(first.s).mod_sub(ensure_bn(second.s), q)
    return ds.mod_mul(dc.mod_inverse(q), q)
