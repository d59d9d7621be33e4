"""
Utils that can be useful for debugging.
"""

import logging

logger = logging.getLogger(__name__)


class SigmaProtocol:
    """
    Runner for one full interactive session.

    Args:
        verifier: :py:class:`zkschnorr.verifier.Verifier` object
        prover: :py:class:`zkschnorr.prover.Prover` object
    """

    def __init__(self, verifier, prover):
        self.verifier = verifier
        self.prover = prover

    def verify(self):
        """Run the three moves and return True if the verifier accepts."""

        # Funky names.
        victor = self.verifier
        peggy = self.prover

        commitment = peggy.begin_session()
        challenge = victor.receive_commitment(commitment)
        response = peggy.respond(challenge)
        result = victor.verify(response)

        if result:
            logger.info("Verified for %s", victor.__class__.__name__)
        else:
            logger.info("Not verified for %s", victor.__class__.__name__)

        return result.accepted
