"""
Library-wide defaults.
"""

from petlib.ec import EcGroup

# secp256k1
DEFAULT_CURVE_NID = 714

DEFAULT_GROUP = EcGroup(DEFAULT_CURVE_NID)

# Hashed to a point to obtain the second Pedersen base H, so that nobody knows log_G(H).
GENERATOR_SEED = b"zkabc:pedersen:h"
