"""
Big-number helpers shared by the group implementations.
"""

from petlib.bn import Bn


def random_in_range(low, high):
    """
    Draw a uniformly random number in the closed interval ``[low, high]``.

    Randomness comes from the OpenSSL CSPRNG behind :py:meth:`petlib.bn.Bn.random`.

    >>> 3 <= random_in_range(3, 5) <= 5
    True
    """
    low, high = ensure_bn(low), ensure_bn(high)
    if high < low:
        raise ValueError("Empty range [{}, {}]".format(low, high))
    return (high - low + 1).random() + low


def ensure_bn(x):
    """
    Ensure that value is big number.

    Only integers are accepted. Floats, strings and booleans are never coerced.

    >>> isinstance(ensure_bn(42), Bn)
    True
    >>> isinstance(ensure_bn(Bn(42)), Bn)
    True
    >>> ensure_bn(4.2)
    Traceback (most recent call last):
    ...
    TypeError: Expected an integer, got 4.2

    Raises:
        TypeError: If ``x`` is not an integer.
    """
    if isinstance(x, Bn):
        return x
    if isinstance(x, int) and not isinstance(x, bool):
        return Bn.from_num(x)
    raise TypeError("Expected an integer, got {!r}".format(x))


def int_div(a, b):
    """
    Integer division of two big numbers.

    >>> int_div(Bn(22), Bn(11))
    2
    """
    return Bn.from_num(int(a) // int(b))


def ladder_pow(base, exponent, modulus, num_bits):
    """
    Modular exponentiation with a Montgomery ladder.

    The ladder always runs ``num_bits`` iterations and performs one multiplication and one
    squaring per iteration, whatever the exponent bits are. The exponent must be smaller than
    ``2 ** num_bits``.

    >>> ladder_pow(Bn(4), Bn(6), Bn(23), 4)
    2

    Args:
        base: Base, reduced modulo ``modulus``.
        exponent: Non-negative exponent.
        modulus: Modulus.
        num_bits: Fixed number of exponent bits to process.
    """
    modulus = ensure_bn(modulus)
    e = int(exponent)
    if e < 0 or e >> num_bits:
        raise ValueError("Exponent does not fit in {} bits".format(num_bits))

    acc = [Bn(1), ensure_bn(base) % modulus]
    for i in reversed(range(num_bits)):
        bit = (e >> i) & 1
        acc[1 - bit] = acc[0].mod_mul(acc[1], modulus)
        acc[bit] = acc[bit].mod_mul(acc[bit], modulus)
    return acc[0]
