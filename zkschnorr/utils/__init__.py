from zkschnorr.utils.groups import (
    random_in_range,
    ensure_bn,
    int_div,
    ladder_pow,
)
from zkschnorr.utils.encoding import encode_int, decode_int, encode_ints, decode_ints
