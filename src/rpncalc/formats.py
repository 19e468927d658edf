'''
Display modes: how a stack value is rendered, and how pad text is read
back into a double.
'''

from collections import namedtuple
from decimal import Decimal, ROUND_HALF_EVEN
from enum import Enum
import math

from .bitops import to_long, UINT64_MASK, INT64_MAX
from .lexer import Lexer
from .primes import prime_string
from .rational import best_rational, imperial
from .util import ParseError, wrap_user_errors


# Appended whenever the rendered value is not exactly the stack value
APPROX_MARKER = ' + ϵ'

# float_string renders plain decimals inside this magnitude window
_FIXED_MAX = 1e16
_FIXED_MIN = 1e-6
_FRACTION_DIGITS = Decimal(1).scaleb(-16)


class DisplayMode(Enum):
    FLOAT = 'float'
    HEX = 'hex'
    IMPROPER = 'improper'
    MIXIMPERIAL = 'miximperial'
    PRIME = 'prime'
    FIX = 'fix'
    SCI = 'sci'
    TIME = 'time'


FormatState = namedtuple('FormatState', 'epsilon decimal_places mode')


def approx_marker(error, tolerance):
    return APPROX_MARKER if abs(error) > tolerance else ''


def float_string(value):
    '''
    Locale independent decimal rendering, without grouping.

    Up to 16 fraction digits for 1e-6 <= |value| <= 1e16, otherwise the
    shortest round-tripping scientific form, e.g. 1.1805916207174113E21.
    '''
    if math.isnan(value):
        return 'NaN'
    if math.isinf(value):
        return 'Infinity' if value > 0 else '-Infinity'
    if value == 0:
        # Negative zero too
        return '0'
    magnitude = abs(value)
    if magnitude > _FIXED_MAX or 0 < magnitude < _FIXED_MIN:
        mantissa, _, exponent = repr(value).partition('e')
        if '.' not in mantissa:
            mantissa += '.0'
        return '{}E{}'.format(mantissa, int(exponent))
    number = Decimal(repr(value))
    if number.as_tuple().exponent < -16:
        number = number.quantize(_FRACTION_DIGITS, rounding=ROUND_HALF_EVEN)
    text = format(number, 'f')
    if '.' in text:
        text = text.rstrip('0').rstrip('.')
    return text


def time_string(hours):
    '''
    Render decimal hours as H:MM, rounded to the nearest minute.
    '''
    sign = '-' if hours < 0 else ''
    hours = abs(hours)
    whole = math.floor(hours)
    minutes = math.floor(60 * (hours - whole) + 0.5)
    if minutes == 60:
        whole, minutes = whole + 1, 0
    return '{}{}:{:02d}'.format(sign, whole, minutes)


def fraction_string(fraction, epsilon, improper):
    '''
    Render a Fraction as "n / d", or "w - n / d" unless improper.

    The fraction must not be the unrepresentable sentinel.
    '''
    marker = approx_marker(fraction.error, epsilon * epsilon)
    n, d = fraction.numerator, fraction.denominator
    if d < 0:
        n, d = -n, -d
    sign = ''
    if n < 0:
        sign = '-'
        n = -n
    whole = 0
    if not improper:
        whole, n = divmod(n, d)
    if n == 0:
        d = 1
    if d == 1:
        return '{}{}{}'.format(sign, n if improper else whole, marker)
    if whole == 0:
        return '{}{} / {}{}'.format(sign, n, d, marker)
    return '{}{} - {} / {}{}'.format(sign, whole, n, d, marker)


def format_float(value, state):
    return float_string(value)


def format_hex(value, state):
    truncated = to_long(value)
    error = value - truncated if math.isfinite(value) else 0.0
    marker = approx_marker(error, state.epsilon * state.epsilon)
    return '0x{:x}{}'.format(truncated & UINT64_MASK, marker)


def format_improper(value, state):
    fraction = best_rational(value, state.epsilon)
    if fraction.unrepresentable:
        return float_string(value)
    return fraction_string(fraction, state.epsilon, improper=True)


def format_miximperial(value, state):
    fraction = imperial(value, state.epsilon)
    if fraction.unrepresentable:
        return float_string(value)
    return fraction_string(fraction, state.epsilon, improper=False)


def format_prime(value, state):
    return '{} = {}'.format(float_string(value), prime_string(to_long(value)))


def format_fix(value, state):
    return '{:.{}f}'.format(value, state.decimal_places)


def format_sci(value, state):
    return '{:.{}e}'.format(value, state.decimal_places)


def format_time(value, state):
    if not math.isfinite(value):
        return float_string(value)
    return time_string(value)


@wrap_user_errors('Cannot convert {0!r}', ParseError)
def parse_decimal(text, state=None):
    Lexer().lex(text, 'decimal')
    return float(text)


@wrap_user_errors('Cannot convert {0!r}', ParseError)
def parse_hex(text, state=None):
    '''
    Read text as an unsigned 64 bit hex pattern and reinterpret it as two's
    complement: 'ffffffffffffffff' is -1.
    '''
    Lexer().lex(text, 'hexadecimal')
    pattern = int(text, 16)
    if pattern > INT64_MAX:
        pattern -= 1 << 64
    return float(pattern)


FORMATTERS = {
    DisplayMode.FLOAT: format_float,
    DisplayMode.HEX: format_hex,
    DisplayMode.IMPROPER: format_improper,
    DisplayMode.MIXIMPERIAL: format_miximperial,
    DisplayMode.PRIME: format_prime,
    DisplayMode.FIX: format_fix,
    DisplayMode.SCI: format_sci,
    DisplayMode.TIME: format_time,
}

PARSERS = {mode: parse_decimal for mode in DisplayMode}
PARSERS[DisplayMode.HEX] = parse_hex


def format_value(value, state):
    '''
    Render value in the state's display mode.
    '''
    return FORMATTERS[state.mode](value, state)


def parse_value(text, state):
    '''
    Read pad text in the state's display mode. Raises ParseError.
    '''
    return PARSERS[state.mode](text, state)
