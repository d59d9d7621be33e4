"""
Common exception classes.

A rejected proof is not an error: :py:meth:`zkschnorr.verifier.Verifier.verify` returns a
negative :py:class:`zkschnorr.messages.Result` instead. Everything below signals that the
protocol itself could not run.
"""


class ProtocolError(Exception):
    """Base class for all errors raised by the proof engine."""


class ParameterGenerationError(ProtocolError):
    """No suitable group was found within the allowed number of trials."""


class InvalidParametersError(ProtocolError):
    """Group parameters or keys failed validation."""


class ParameterMismatchError(ProtocolError):
    """Prover and verifier do not hold the same statement, impossible to verify."""


class InvalidStateError(ProtocolError):
    """Operation invoked out of sequence."""


class InvalidCommitmentError(ProtocolError):
    """Commitment is not a valid group element."""


class InvalidChallengeError(ProtocolError):
    """Challenge is outside of the challenge space."""


class ReplayDetectedError(ProtocolError):
    """Commitment was already seen within the replay window."""


class ReplayWindowFullError(ReplayDetectedError):
    """Replay window is at capacity, the commitment cannot be tracked."""


class UnknownIdentityError(ProtocolError):
    """No public key is registered for the prover identity."""
