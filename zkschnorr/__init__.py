__version__ = "0.1.0"
__title__ = "zkschnorr"
__author__ = "zkschnorr developers"
__email__ = ""
__url__ = ""
__license__ = "MIT"
__description__ = "Interactive and non-interactive Schnorr proofs of knowledge of a discrete logarithm."
__copyright__ = "2026, zkschnorr developers"

import logging

from zkschnorr.group import GroupParameters, get_named_group, validate
from zkschnorr.keys import KeyPair
from zkschnorr.prover import Prover
from zkschnorr.verifier import Verifier
from zkschnorr.replay import ReplayWindow
from zkschnorr.nizk import prove_nizk, verify_nizk

logging.getLogger(__name__).addHandler(logging.NullHandler())
