'''
Bit-level helpers for treating calculator doubles as 64-bit integers.
'''

import math


INT64_MIN = -(1 << 63)
INT64_MAX = (1 << 63) - 1
UINT64_MASK = (1 << 64) - 1


def to_long(x):
    '''
    Truncate a double toward zero into the int64 range.

    Saturates at the int64 bounds; NaN becomes 0.
    '''
    if math.isnan(x):
        return 0
    if x >= INT64_MAX:
        return INT64_MAX
    if x <= INT64_MIN:
        return INT64_MIN
    return int(x)


def wrap64(v):
    '''
    Reinterpret an unbounded int as a signed two's complement int64.
    '''
    v &= UINT64_MASK
    return v - (1 << 64) if v > INT64_MAX else v


def find_first_one(v):
    '''
    Index of the highest set bit of v, i.e. floor(log2(v)) for v > 0.

    Non-positive values report 63: a negative int64 has its top bit set.
    '''
    if v <= 0:
        return 63
    return min(v.bit_length(), 64) - 1


def sign_extend(value):
    '''
    Treat the highest set bit of a positive value as the sign bit of a
    narrower field and extend it: 0xf -> -1, 0x10 -> -16.
    '''
    if value > 0:
        return value - 2.0 ** (1 + find_first_one(to_long(value)))
    return value


def sign_crop(value):
    '''
    Inverse of sign_extend: the narrowest unsigned field whose sign
    extension gives back the value. -1 -> 1, -16 -> 0x10.
    '''
    if value == 0:
        return value
    v = to_long(value)
    bit = find_first_one(v) - 1
    # Skip the run of copies of the sign bit
    while bit >= 0 and (v >> bit) & 1:
        bit -= 1
    mask = (1 << min(bit + 2, 64)) - 1
    return float(v & mask)
