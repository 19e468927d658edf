'''
Rational approximation of doubles.

Pi to 6 decimal places is 355/113. How did we find that? Continued
fractions:

    x = a0 + 1/(a1 + 1/(a2 + 1/(a3 + ...)))

with a0 = floor(x), a1 = floor(1/(x - a0)), and so on. For pi the terms are
3, 7, 15, 1, 292, ...

Truncating after term i gives the convergent n(i)/d(i), and the convergents
obey

    n(i) = n(i-1) * a(i) + n(i-2)
    d(i) = d(i-1) * a(i) + d(i-2)

starting from n(-1)/d(-1) = 1/0 and n(0)/d(0) = a0/1. Written as a 2x2
matrix (the continuant) this is a running product of [[a(i), 1], [1, 0]].

The terms are taken from the exact binary value of the double, so they
never pick up rounding noise, and a double's expansion always terminates.
'''

from collections import namedtuple
import fractions
import math

from .bitops import INT64_MAX


_MAX_TERMS = 100
_HALF = fractions.Fraction(1, 2)


class Fraction(namedtuple('Fraction', 'numerator denominator error')):
    '''
    numerator/denominator approximating some double; error is the source
    minus the approximation.

    A zero denominator is the "unrepresentable" sentinel, not a fraction.
    '''
    __slots__ = ()

    @property
    def unrepresentable(self):
        return self.denominator == 0

    def near(self, other, tolerance):
        '''
        Same numerator and denominator, and both errors within tolerance.
        '''
        if self.numerator != other.numerator:
            return False
        if self.denominator != other.denominator:
            return False
        return max(abs(self.error), abs(other.error)) <= abs(tolerance)


UNREPRESENTABLE = Fraction(0, 0, 0.0)


def _too_big(x):
    '''
    Return true if numerator or denominator of x could not fit an int64.
    '''
    if not math.isfinite(x):
        return True
    return x != 0.0 and (x > INT64_MAX or 1 / x > INT64_MAX)


def _fits(n, d):
    return 0 < d <= INT64_MAX and abs(n) <= INT64_MAX


def _round_half_up(x):
    return math.floor(x + _HALF)


def best_rational(x, epsilon):
    '''
    Best rational approximation of x with denominator at most 1/epsilon.

    After David Eppstein's float_to_frac.c (UC Irvine, 1993), with
    corrections from Arno Formella (2008). The sign is carried on the
    numerator; the denominator is positive unless the result is the
    UNREPRESENTABLE sentinel. Numerator and denominator always fit an
    int64, which also bounds the denominator when epsilon is 0.
    '''
    sign = -1 if x < 0 else 1
    startx = abs(x)
    if _too_big(startx):
        return UNREPRESENTABLE
    if epsilon == 0:
        maxden = INT64_MAX
    else:
        maxden = min(1 / epsilon, INT64_MAX)

    exact = rest = fractions.Fraction(startx)
    m00, m01 = 1, 0
    m10, m11 = 0, 1
    loops = 0
    ai = math.floor(rest)
    # Find terms until the denominator gets too big
    while m10 * ai + m11 <= maxden and m00 * ai + m01 <= INT64_MAX and \
            loops < _MAX_TERMS:
        loops += 1
        m00, m01 = m00 * ai + m01, m00
        m10, m11 = m10 * ai + m11, m10
        if rest == ai:
            break
        rest = 1 / (rest - ai)
        ai = math.floor(rest)

    if m10 == 0:
        # Not even one term fits: fall back to the integer part
        whole = int(startx)
        return Fraction(sign * whole, 1, sign * (startx - whole))

    # The remainder lies between 0 and 1/ai: try it as zero ...
    n1, d1 = m00, m10
    best = n1, d1
    # ... and as 1/m with m the largest term that still fits maxden
    ai = math.floor((maxden - m11) / m10)
    n2, d2 = m00 * ai + m01, m10 * ai + m11
    if _fits(n2, d2) and \
       abs(exact - fractions.Fraction(n2, d2)) < \
       abs(exact - fractions.Fraction(n1, d1)):
        best = n2, d2

    n, d = best
    return Fraction(sign * n, d, sign * (startx - n / d))


def convergent(x, epsilon):
    '''
    First continued fraction convergent of x within epsilon of it.

    Unlike best_rational the bound is on the error, not the denominator.
    Returns UNREPRESENTABLE if no convergent gets there within 100 terms
    and the int64 range.
    '''
    sign = -1 if x < 0 else 1
    x = abs(x)
    if _too_big(x):
        return UNREPRESENTABLE
    epsilon = abs(epsilon)
    rest = fractions.Fraction(x)
    ai = math.floor(rest)
    n_1, n0 = 1, ai
    d_1, d0 = 0, 1
    for _ in range(_MAX_TERMS):
        if not _fits(n0, d0):
            break
        err = x - n0 / d0
        if abs(err) <= epsilon:
            return Fraction(sign * n0, d0, sign * err)
        if rest == ai:
            break
        rest = 1 / (rest - ai)
        ai = math.floor(rest)
        n_1, n0 = n0, n0 * ai + n_1
        d_1, d0 = d0, d0 * ai + d_1
    return UNREPRESENTABLE


def gcd(a, b):
    '''
    Greatest common divisor of the magnitudes of a and b.

    If either is zero the answer is 1, not the other operand: callers
    divide by it when reducing fractions.
    '''
    a, b = abs(a), abs(b)
    if a == 0 or b == 0:
        return 1
    while b:
        a, b = b, a % b
    return a


def lcm(a, b):
    return a * b // gcd(a, b)


def _imperial_scale(epsilon):
    '''
    Smallest power of two no smaller than 1/epsilon, rounded half up to an
    integer; 0 if epsilon allows none.
    '''
    if not epsilon > 0 or not math.isfinite(epsilon):
        return 0
    inverse = 1 / epsilon
    if not math.isfinite(inverse):
        return 0
    exponent = math.ceil(math.log2(inverse))
    if exponent < 0:
        # 1/2 rounds up to 1, smaller powers to 0
        return 1 if exponent == -1 else 0
    return 1 << exponent


def imperial(x, epsilon):
    '''
    Approximate x by a fraction whose denominator is a power of two no
    smaller than 1/epsilon, reduced to lowest terms.

    Falls back to the nearest integer when no such fraction fits an int64.
    Non-finite x, or x beyond the int64 range, is UNREPRESENTABLE.
    '''
    if not math.isfinite(x) or abs(x) > INT64_MAX:
        return UNREPRESENTABLE
    sign = -1 if x < 0 else 1
    x = abs(x)
    scale = _imperial_scale(epsilon)
    if scale:
        n = _round_half_up(fractions.Fraction(x) * scale)
        g = gcd(n, scale)
        n //= g
        d = scale // g
        if n == 0:
            # gcd(0, d) is 1, so d is still the scale; zero is 0/1
            d = g
        if _fits(n, d):
            return Fraction(sign * n, d, x - n / d)
    # Can't convert at this precision: report the nearest integer
    whole = _round_half_up(fractions.Fraction(x))
    return Fraction(sign * whole, 1, x - whole)
