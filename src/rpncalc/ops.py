'''
Calculator operators on doubles.

None of these raise: domain errors, overflow and division by zero give the
IEEE-754 answer (inf or NaN) instead. Bitwise operators work on the int64
truncation of their operands.
'''

import math

from . import bitops
from . import rational


def add(a, b):
    return a + b


def sub(a, b):
    return a - b


def mul(a, b):
    return a * b


def div(a, b):
    if b == 0:
        if a == 0 or math.isnan(a):
            return math.nan
        return math.copysign(math.inf, a) * math.copysign(1.0, b)
    return a / b


def mod(a, b):
    if b == 0 or math.isinf(a):
        return math.nan
    return math.fmod(a, b)


def y_pow_x(a, b):
    try:
        return math.pow(a, b)
    except OverflowError:
        if a < 0 and float(b).is_integer() and b % 2:
            return -math.inf
        return math.inf
    except ValueError:
        # 0 to a negative power, or a negative base to a fractional one
        return math.inf if a == 0 else math.nan


def chs(a):
    return -a


def inv(a):
    return div(1.0, a)


def _real_only(f):
    '''
    Negative infinity for arguments below zero, rather than a complex result.
    '''
    def wrapped(a):
        if a < 0:
            return -math.inf
        if a == 0 and f is not math.sqrt:
            return -math.inf
        return f(a)
    wrapped.__name__ = f.__name__
    wrapped.__doc__ = f.__doc__
    return wrapped


sqrt = _real_only(math.sqrt)
ln = _real_only(math.log)
log10 = _real_only(math.log10)
log2 = _real_only(math.log2)


def exp(a):
    try:
        return math.exp(a)
    except OverflowError:
        return math.inf


def pow10(a):
    return y_pow_x(10.0, a)


def pow2(a):
    return y_pow_x(2.0, a)


def times2(a):
    return a * 2


def div2(a):
    return a / 2


def _integral(f):
    '''
    Apply an integer-valued rounding only to finite values.
    '''
    def wrapped(a):
        if not math.isfinite(a):
            return a
        return float(f(a))
    wrapped.__name__ = f.__name__
    return wrapped


floor = _integral(math.floor)
ceil = _integral(math.ceil)
# Half up, like the round key on a pocket calculator
round_ = _integral(lambda a: math.floor(a + 0.5))


def _trig(f):
    '''
    NaN outside the function's domain (e.g. acos(2), sin(inf)).
    '''
    def wrapped(a):
        try:
            return f(a)
        except ValueError:
            return math.nan
    wrapped.__name__ = f.__name__
    return wrapped


sin = _trig(math.sin)
cos = _trig(math.cos)
tan = _trig(math.tan)
asin = _trig(math.asin)
acos = _trig(math.acos)
atan = _trig(math.atan)


def deg_to_rad(a):
    return math.pi * a / 180


def rad_to_deg(a):
    return 180 * a / math.pi


def _bitwise(f):
    def wrapped(a, b):
        return float(bitops.wrap64(f(bitops.to_long(a), bitops.to_long(b))))
    wrapped.__name__ = f.__name__
    return wrapped


and_ = _bitwise(lambda a, b: a & b)
or_ = _bitwise(lambda a, b: a | b)
xor = _bitwise(lambda a, b: a ^ b)


def not_(a):
    return -1.0 - a


def gcd(a, b):
    return float(rational.gcd(bitops.to_long(a), bitops.to_long(b)))


def lcm(a, b):
    return float(rational.lcm(bitops.to_long(a), bitops.to_long(b)))


sign_crop = bitops.sign_crop
sign_extend = bitops.sign_extend
