"""
Verifier side of an interactive Schnorr proof.
"""

import logging

from zkschnorr.consts import CHALLENGE_LENGTH
from zkschnorr.exceptions import (
    InvalidChallengeError,
    InvalidCommitmentError,
    InvalidParametersError,
    ParameterMismatchError,
    ReplayDetectedError,
)
from zkschnorr.messages import Challenge, Commitment, Response, Result
from zkschnorr.session import (
    SessionStateMachine,
    Transcript,
    VerifierState,
    check_equation,
    statement_hash,
)
from zkschnorr.utils import ensure_bn

logger = logging.getLogger(__name__)


class Verifier(SessionStateMachine):
    """
    The verifier in one Schnorr proof session.

    Every commitment is recorded in the replay window before a challenge is issued for it, so a
    commitment can never be answered twice across all verifiers sharing the window.

    Example, with the challenge fixed to reproduce a known transcript:

    >>> from zkschnorr.group import GroupParameters
    >>> from zkschnorr.replay import ReplayWindow
    >>> params = GroupParameters(23, 4, q=11)
    >>> verifier = Verifier(params, 2, ReplayWindow())
    >>> verifier.receive_commitment(18, challenge=5).c
    5
    >>> verifier.verify(0).accepted
    True

    Args:
        params: Group, shared with the prover.
        public_key: Public key :math:`Y` of the prover.
        replay_window (:py:class:`zkschnorr.replay.ReplayWindow`): Store of seen commitments.
        challenge_bits: Length of challenges in bits. The challenge space is capped by the group
            order.
        clock: Callable returning the current time in seconds.

    Raises:
        InvalidParametersError: If the public key is not a valid element of the group.
    """

    initial_state = VerifierState.AWAITING_COMMITMENT
    aborted_state = VerifierState.ABORTED
    terminal_states = frozenset(
        [VerifierState.ACCEPTED, VerifierState.REJECTED, VerifierState.ABORTED]
    )
    transitions = {
        (
            VerifierState.AWAITING_COMMITMENT,
            "receive_commitment",
        ): VerifierState.AWAITING_RESPONSE,
        (VerifierState.AWAITING_RESPONSE, "accept"): VerifierState.ACCEPTED,
        (VerifierState.AWAITING_RESPONSE, "reject"): VerifierState.REJECTED,
    }

    def __init__(
        self, params, public_key, replay_window, challenge_bits=CHALLENGE_LENGTH, **kwargs
    ):
        try:
            y = params.element(public_key)
        except (TypeError, ValueError) as e:
            raise InvalidParametersError("Malformed public key") from e
        if not params.is_member(y) or y == params.infinite():
            raise InvalidParametersError("Public key is not a valid group element")

        super().__init__(**kwargs)
        self.params = params
        self.y = y
        self.replay_window = replay_window
        self.stmt_hash = statement_hash(params, y)
        self.transcript = None
        self._group_id = params.fingerprint()

        self.challenge_space = params.challenge_space(challenge_bits)
        if self.soundness_bits < CHALLENGE_LENGTH:
            logger.warning(
                "Challenge space of %d bits gives weak soundness", self.soundness_bits
            )

    @classmethod
    def for_identity(cls, params, registry, identity, replay_window, **kwargs):
        """
        Build a verifier for a registered prover.

        Raises:
            UnknownIdentityError: If the registry has no key for ``identity``.
        """
        return cls(params, registry.lookup(identity), replay_window, **kwargs)

    @property
    def soundness_bits(self):
        """Bits of soundness of one run: :math:`\\log_2` of the challenge space size."""
        return self.challenge_space.num_bits() - 1

    @property
    def result(self):
        """The :py:class:`zkschnorr.messages.Result`, or None if not verified yet."""
        if self.state == VerifierState.ACCEPTED:
            return Result(accepted=True)
        if self.state == VerifierState.REJECTED:
            return Result(accepted=False)
        return None

    def receive_commitment(self, commitment, challenge=None):
        """
        Store the received commitment and generate a challenge.

        The challenge is drawn uniformly from the challenge space.

        Args:
            commitment: A :py:class:`zkschnorr.messages.Commitment`, or the bare value of
                :math:`R`.
            challenge: Optional challenge to issue instead of a random one. Only meant for
                reproducing test vectors.

        Returns:
            :py:class:`zkschnorr.messages.Challenge`

        Raises:
            InvalidStateError: If a commitment was already received.
            ParameterMismatchError: If the prover uses another group or public key.
            InvalidCommitmentError: If :math:`R` is not in :math:`[1, p - 1]`.
            ReplayDetectedError: If :math:`R` was seen within the replay window.
            ReplayWindowFullError: If the replay window is at capacity.
        """
        next_state = self._expect("receive_commitment")
        if isinstance(commitment, Commitment):
            r, stmt_hash = commitment.r, commitment.stmt_hash
        else:
            r, stmt_hash = commitment, None

        if stmt_hash is not None and stmt_hash != self.stmt_hash:
            self._fail()
            raise ParameterMismatchError(
                "Prover statement does not match the local group and public key"
            )

        try:
            r = self.params.element(r)
        except (TypeError, ValueError) as e:
            self._fail()
            raise InvalidCommitmentError("Malformed commitment") from e
        if not self.params.check_element(r):
            self._fail()
            raise InvalidCommitmentError("Commitment is not a valid group element")

        if challenge is None:
            c = self.challenge_space.random()
        else:
            try:
                c = ensure_bn(challenge)
            except TypeError as e:
                self._fail()
                raise InvalidChallengeError("Malformed challenge") from e
            if not 0 <= c < self.challenge_space:
                self._fail()
                raise InvalidChallengeError("Challenge outside of the challenge space")

        try:
            self.replay_window.check_and_add(
                self._group_id + self.params.encode_element(r)
            )
        except ReplayDetectedError:
            self._fail()
            raise

        self.transcript = Transcript(
            r=r, c=c, stmt_hash=self.stmt_hash, created_at=self.created_at
        )
        self._enter(next_state)
        return Challenge(c=c)

    def verify(self, response):
        """
        Check the response against the stored commitment and challenge.

        Accepts if :math:`s G = R + c Y`. A response outside of :math:`[0, q - 1]` is rejected.

        Args:
            response: A :py:class:`zkschnorr.messages.Response`, or the bare value of :math:`s`.

        Returns:
            :py:class:`zkschnorr.messages.Result`: Rejection is a result, not an exception.

        Raises:
            InvalidStateError: If no challenge was issued, or the session is finished.
        """
        self._expect("accept")
        s = response.s if isinstance(response, Response) else response
        try:
            s = ensure_bn(s)
        except (TypeError, ValueError):
            s = None

        accepted = (
            s is not None
            and 0 <= s < self.params.order()
            and check_equation(
                self.params, self.y, self.transcript.r, self.transcript.c, s
            )
        )
        self.transcript.s = s
        self.transcript.accepted = accepted
        self._enter(self._expect("accept" if accepted else "reject"))
        logger.info("Proof %s", "accepted" if accepted else "rejected")
        return Result(accepted=accepted)
