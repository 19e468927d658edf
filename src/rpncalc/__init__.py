'''
RPN calculator core.

Renders IEEE-754 doubles in the display modes a calculator user can pick
(decimal, 64 bit hex, fractions, power-of-two fractions, prime factors,
fixed, scientific, clock time) and reads typed digits back under the same
rules. The stack lives in an undo log of immutable snapshots, one per
operation.

Not an arbitrary precision calculator: everything is a double, or a 64 bit
integer on the way through bitwise and fraction operations.
'''

from .calculator import Calculator
from .formats import DisplayMode, FormatState, format_value, parse_value
from .machine import Machine
from .rational import Fraction, best_rational, convergent, gcd, imperial, lcm
from .repository import MemoryRepository, SerialRepository
from .store import EpochStore, Snapshot
from .util import LogCorruption, ParseError, RPNError, StackUnderflow


__all__ = ('Calculator', 'DisplayMode', 'FormatState', 'format_value',
           'parse_value', 'Machine', 'Fraction', 'best_rational', 'convergent',
           'gcd', 'imperial', 'lcm', 'MemoryRepository', 'SerialRepository',
           'EpochStore', 'Snapshot', 'LogCorruption', 'ParseError', 'RPNError',
           'StackUnderflow')
