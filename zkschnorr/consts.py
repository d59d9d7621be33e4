"""
Library-wide defaults.

Every value here can be overridden per call with the matching keyword argument.
"""

# Length of an interactive challenge in bits. The effective challenge space is capped by the
# group order.
CHALLENGE_LENGTH = 128

# Group returned by ``zkschnorr.group.get_named_group`` when no name is given. Must be one of
# ``zkschnorr.group.AVAILABLE_GROUPS``.
DEFAULT_GROUP_NAME = "modp2048"

# Order of the prime subgroup for freshly generated Schnorr groups.
DEFAULT_SUBGROUP_BITS = 256

# Cofactor candidates tried before parameter generation gives up.
DEFAULT_MAX_TRIALS = 10000

# Seconds a commitment stays in the replay window.
DEFAULT_REPLAY_WINDOW = 300
