'''
Display mode rendering and parsing tests
'''

import math

from pytest import raises

from rpncalc.formats import (DisplayMode, FormatState, float_string,
                             format_value, parse_value, time_string)
from rpncalc.util import ParseError


def state_for(mode, epsilon=1e-4, decimal_places=2):
    return FormatState(epsilon, decimal_places, mode)


def render(mode, value):
    return format_value(value, state_for(mode))


def parse(mode, text):
    return parse_value(text, state_for(mode))


def test_float_string():
    assert float_string(0.0) == '0'
    assert float_string(1.0) == '1'
    assert float_string(-1.0) == '-1'
    assert float_string(1.5) == '1.5'
    assert float_string(2 ** -10) == '0.0009765625'
    assert float_string(1 - 2 ** -10) == '0.9990234375'
    assert float_string(math.pi) == '3.141592653589793'
    assert float_string(1e+6) == '1000000'
    assert float_string(1e-6) == '0.000001'
    for e, text in [(10, '1024'), (20, '1048576'), (30, '1073741824'),
                    (40, '1099511627776'), (50, '1125899906842624')]:
        assert float_string(2.0 ** e) == text


def test_float_string_exponential():
    assert float_string(2.0 ** 60) == '1.152921504606847E18'
    assert float_string(2.0 ** 70) == '1.1805916207174113E21'
    assert float_string(2.0 ** -20) == '9.5367431640625E-7'
    assert float_string(2.0 ** -30) == '9.313225746154785E-10'
    assert float_string(2.0 ** -40) == '9.094947017729282E-13'
    assert float_string(2.0 ** -50) == '8.881784197001252E-16'
    assert float_string(2.0 ** -60) == '8.673617379884035E-19'
    assert float_string(2.0 ** -70) == '8.470329472543003E-22'
    assert float_string(-1e20) == '-1.0E20'


def test_float_string_special():
    assert float_string(math.nan) == 'NaN'
    assert float_string(math.inf) == 'Infinity'
    assert float_string(-math.inf) == '-Infinity'


def test_time_string():
    assert time_string(0.0) == '0:00'
    assert time_string(1.5) == '1:30'
    assert time_string(1.501) == '1:30'
    assert time_string(-1.25) == '-1:15'
    assert time_string(0.4 / 60) == '0:00'
    assert time_string(0.6 / 60) == '0:01'
    assert time_string(12.0) == '12:00'


def test_time_string_carries_minutes():
    assert time_string(1.9999) == '2:00'
    assert time_string(-0.9999) == '-1:00'


def test_format_float():
    assert render(DisplayMode.FLOAT, 1.5) == '1.5'
    assert render(DisplayMode.FLOAT, 2.0 ** 70) == '1.1805916207174113E21'


def test_format_hex():
    assert render(DisplayMode.HEX, 0.0) == '0x0'
    assert render(DisplayMode.HEX, 1.0) == '0x1'
    assert render(DisplayMode.HEX, -1.0) == '0xffffffffffffffff'
    assert render(DisplayMode.HEX, 1.5) == '0x1 + ϵ'
    assert render(DisplayMode.HEX, 16.0) == '0x10'
    assert render(DisplayMode.HEX, -16.0) == '0xfffffffffffffff0'


def test_format_improper():
    assert render(DisplayMode.IMPROPER, 0.0) == '0'
    assert render(DisplayMode.IMPROPER, -1.0) == '-1'
    assert render(DisplayMode.IMPROPER, -3 / 2) == '-3 / 2'
    assert render(DisplayMode.IMPROPER, 2.75) == '11 / 4'
    assert render(DisplayMode.IMPROPER, math.pi) == '355 / 113 + ϵ'


def test_format_improper_unrepresentable():
    assert render(DisplayMode.IMPROPER, 1e20) == '1.0E20'
    assert render(DisplayMode.IMPROPER, math.inf) == 'Infinity'


def test_format_miximperial():
    assert render(DisplayMode.MIXIMPERIAL, 0.0) == '0'
    assert render(DisplayMode.MIXIMPERIAL, -1.0) == '-1'
    assert render(DisplayMode.MIXIMPERIAL, -3 / 2) == '-1 - 1 / 2'
    assert render(DisplayMode.MIXIMPERIAL, math.pi) == '3 - 145 / 1024 + ϵ'
    assert render(DisplayMode.MIXIMPERIAL, 1 / math.pi) == '5215 / 16384 + ϵ'
    assert render(DisplayMode.MIXIMPERIAL, math.nan) == 'NaN'


def test_format_fix():
    assert render(DisplayMode.FIX, 0.0) == '0.00'
    assert render(DisplayMode.FIX, 1.0) == '1.00'
    assert render(DisplayMode.FIX, -3 / 2) == '-1.50'
    assert render(DisplayMode.FIX, math.pi) == '3.14'
    assert render(DisplayMode.FIX, 1 / math.pi) == '0.32'
    assert format_value(math.pi, state_for(DisplayMode.FIX,
                                           decimal_places=4)) == '3.1416'


def test_format_sci():
    assert render(DisplayMode.SCI, 0.0) == '0.00e+00'
    assert render(DisplayMode.SCI, 1.0) == '1.00e+00'
    assert render(DisplayMode.SCI, -3 / 2) == '-1.50e+00'
    assert render(DisplayMode.SCI, math.pi) == '3.14e+00'
    assert render(DisplayMode.SCI, 1 / math.pi) == '3.18e-01'


def test_format_prime():
    assert render(DisplayMode.PRIME, 0.0) == '0 = 0'
    assert render(DisplayMode.PRIME, 1.0) == '1 = 1'
    assert render(DisplayMode.PRIME, 3 / 2) == '1.5 = 1'
    assert render(DisplayMode.PRIME, -1.0) == '-1 = -1'
    assert render(DisplayMode.PRIME, -6.0) == '-6 = -2*3'
    assert render(DisplayMode.PRIME, 2 * 3 * 5 * 7 * 11.0) == \
        '2310 = 2*3*5*7*11'
    assert render(DisplayMode.PRIME, 9.0) == '9 = 3^2'
    assert render(DisplayMode.PRIME, 123456789.0) == \
        '123456789 = 3^2*3607*3803'


def test_format_time():
    assert render(DisplayMode.TIME, 1.5) == '1:30'
    assert render(DisplayMode.TIME, -1.25) == '-1:15'
    assert render(DisplayMode.TIME, math.inf) == 'Infinity'


def test_parse_float():
    mode = DisplayMode.FLOAT
    assert parse(mode, '0') == 0.0
    assert parse(mode, '000') == 0.0
    assert parse(mode, '0.0') == 0.0
    assert parse(mode, '0.') == 0.0
    assert parse(mode, '.0') == 0.0
    assert parse(mode, '1') == 1.0
    assert parse(mode, '1.5') == 1.5
    assert parse(mode, '.1') == 0.1
    assert parse(mode, '0.1') == 0.1
    assert parse(mode, '0.01') == 0.01
    assert parse(mode, '0.00001') == 0.00001
    assert parse(mode, '0.0000000000000000000001') == 1e-22
    assert parse(mode, '12345') == 12345.0
    assert parse(mode, '1234567890') == 1234567890.0
    assert parse(mode, '12345678901234567890') == 12345678901234567890.0
    assert parse(mode, '1.5E+3') == 1500.0
    assert parse(mode, '25E-1') == 2.5
    assert parse(mode, '-2') == -2.0


def test_parse_float_errors():
    mode = DisplayMode.FLOAT
    for text in ['.', '1.2.3', '', 'E+', '1E', '0x10', 'abc', '1 2']:
        with raises(ParseError):
            parse(mode, text)


def test_parse_error_message():
    with raises(ParseError, match=r"Couldn't lex '1\.2\.3' as decimal"):
        parse(DisplayMode.FLOAT, '1.2.3')


def test_parse_error_is_value_error():
    with raises(ValueError):
        parse(DisplayMode.FLOAT, '.')


def test_parse_hex():
    mode = DisplayMode.HEX
    assert parse(mode, '0') == 0.0
    assert parse(mode, '10') == 16.0
    assert parse(mode, '123') == 256 + 2 * 16 + 3.0
    assert parse(mode, 'f') == 15.0
    assert parse(mode, 'F') == 15.0
    assert parse(mode, 'ffffffff') == 2.0 ** 32 - 1
    assert parse(mode, '7fffffffffffffff') == 2.0 ** 63
    assert parse(mode, '800000000000000') == 2.0 ** 59
    assert parse(mode, '8000000000000000') == -2.0 ** 63
    assert parse(mode, 'ffffffffffffffff') == -1.0


def test_parse_hex_errors():
    mode = DisplayMode.HEX
    for text in ['0x10', '3.75', '', '-1', 'g', '1ffffffffffffffff']:
        with raises(ParseError):
            parse(mode, text)


def test_parse_other_modes_as_decimal():
    for mode in [DisplayMode.SCI, DisplayMode.FIX, DisplayMode.IMPROPER,
                 DisplayMode.MIXIMPERIAL, DisplayMode.PRIME, DisplayMode.TIME]:
        assert parse(mode, '0') == 0.0
        assert parse(mode, '1') == 1.0
        assert parse(mode, '1.5') == 1.5
        assert parse(mode, '0.00001') == 0.00001


def test_format_value_dispatch(state):
    assert format_value(0.5, state) == '0.5'
    assert format_value(0.5, state._replace(mode=DisplayMode.IMPROPER)) == \
        '1 / 2'
    assert parse_value('ff', state._replace(mode=DisplayMode.HEX)) == 255.0


def test_float_string_negative_zero():
    assert float_string(-0.0) == '0'
    assert render(DisplayMode.FLOAT, -0.0) == '0'


def test_format_improper_large():
    assert render(DisplayMode.IMPROPER, 2.0 ** 40) == '1099511627776'
    assert render(DisplayMode.IMPROPER, 2e12) == '2000000000000'
    assert render(DisplayMode.IMPROPER, 1e15) == '1000000000000000'
    assert render(DisplayMode.IMPROPER, 1e18) == '1000000000000000000'
    assert render(DisplayMode.IMPROPER, -2e12) == '-2000000000000'
    assert render(DisplayMode.IMPROPER, 2.0 ** 40 + 0.5) == '2199023255553 / 2'


def test_format_miximperial_large():
    assert render(DisplayMode.MIXIMPERIAL, 1e305) == '1.0E305'
    assert render(DisplayMode.MIXIMPERIAL, 2.0 ** 60) == '1152921504606846976'


def test_fractions_with_odd_epsilon():
    infinite = FormatState(math.inf, 2, DisplayMode.MIXIMPERIAL)
    assert format_value(2.5, infinite) == '3'
    assert format_value(2.5, infinite._replace(mode=DisplayMode.IMPROPER)) == \
        '2'
    subnormal = FormatState(1e-320, 2, DisplayMode.MIXIMPERIAL)
    assert format_value(2.5, subnormal) == '3 + ϵ'
    assert format_value(2.5, subnormal._replace(mode=DisplayMode.IMPROPER)) \
        == '5 / 2'
