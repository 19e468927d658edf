import logging
from functools import partial

from .bitops import to_long
from .formats import DisplayMode, FormatState, format_value, parse_value
from .machine import Machine
from .repository import MemoryRepository
from .store import EpochStore
from .util import ParseError, StackUnderflow


logger = logging.getLogger(__name__)


class Calculator:
    '''
    One calculator session: pending-entry pad, display format, and the
    snapshot log holding the stack.

    Every stack operation goes through apply(), which first enters whatever
    is on the pad. Calls must not overlap; observers get the calculator
    after each change.
    '''

    DEFAULT_EPSILON = 1e-4
    DEFAULT_DECIMAL_PLACES = 2
    DEFAULT_MODE = DisplayMode.FLOAT
    MAX_DECIMAL_PLACES = 16

    def __init__(self, repository=None):
        '''
        Resume the session stored in repository, or start a new one.
        '''
        if repository is None:
            repository = MemoryRepository()
        self.repository = repository
        self.store = EpochStore(repository)
        self.pad = repository.get_pad() or ''
        self.format_state = repository.get_format() or \
            FormatState(type(self).DEFAULT_EPSILON,
                        type(self).DEFAULT_DECIMAL_PLACES,
                        type(self).DEFAULT_MODE)
        self.observers = []

    # Read-only view

    @property
    def stack(self):
        return self.store.current().values

    @property
    def mode(self):
        return self.format_state.mode

    def formatted(self, depth=0):
        '''
        Stack element at depth, rendered in the current display mode.
        '''
        return format_value(self.stack[depth], self.format_state)

    def formatted_stack(self):
        return [format_value(value, self.format_state) for value in self.stack]

    def subscribe(self, callback):
        self.observers.append(callback)

    def _notify(self):
        for callback in self.observers:
            callback(self)

    # Pad

    def _set_pad(self, pad):
        self.pad = pad
        self.repository.set_pad(pad)

    def pad_append(self, text):
        self._set_pad(self.pad + text)
        self._notify()

    def pad_append_ee(self):
        '''
        Start an exponent, or flip the sign of the one just started.
        '''
        if self.pad.endswith('E+'):
            pad = self.pad[:-2] + 'E-'
        elif self.pad.endswith('E-'):
            pad = self.pad[:-2] + 'E+'
        else:
            pad = self.pad + 'E+'
        self._set_pad(pad)
        self._notify()

    def pad_backspace(self):
        if self.pad:
            self._set_pad(self.pad[:-1])
            self._notify()

    # Stack

    def _pending(self):
        '''
        Value of the pad, or 0 if it does not parse.
        '''
        try:
            return parse_value(self.pad, self.format_state)
        except ParseError as e:
            logger.warning('%s; entering 0', e.args[0])
            return 0.0

    def _implied_enter(self):
        '''
        Return a working stack, with the pad entered onto it if non-empty.
        '''
        machine = Machine(self.stack)
        if self.pad:
            machine.push(self._pending())
            self.store.append(machine.values())
            self._set_pad('')
        return machine

    def apply(self, operation):
        '''
        Enter the pad, then run operation on a working copy of the stack
        and store the result as a new snapshot.

        operation is an operator name from Machine.OPERATORS, or a callable
        taking the working Machine. Return False, storing nothing, if the
        stack was too shallow for it.
        '''
        if isinstance(operation, str):
            operation = partial(Machine.operate, name=operation)
        entered = bool(self.pad)
        machine = self._implied_enter()
        try:
            operation(machine)
        except StackUnderflow as e:
            logger.debug('No-op: %s', e.args[0])
            if entered:
                self._notify()
            return False
        self.store.append(machine.values())
        self._notify()
        return True

    def enter(self):
        '''
        Copy the pad to the top of the stack and clear it.
        '''
        if self.pad:
            self._implied_enter()
            self._notify()

    def push(self, x):
        return self.apply(lambda machine: machine.push(x))

    def pop(self):
        '''
        Remove and return the top of the stack. Raises StackUnderflow.
        '''
        popped = []
        if not self.apply(lambda machine: popped.append(machine.pop())):
            raise StackUnderflow('Less than 1 element(s) on stack')
        return popped[0]

    def pop1op(self, f):
        '''
        Pop the top of the stack and hand it to f, if there is one.
        '''
        popped = []
        if self.apply(lambda machine: popped.append(machine.pop())):
            f(popped[0])
            return True
        return False

    def swap(self):
        return self.apply(Machine.swap)

    def pick(self, depth):
        return self.apply(lambda machine: machine.pick(depth))

    def binop(self, f):
        return self.apply(lambda machine: machine.binop(f))

    def unop(self, f):
        return self.apply(lambda machine: machine.unop(f))

    def operate(self, name):
        '''
        Run a key by name: a Machine operator, a constant, or a function.
        '''
        if name in Machine.OPERATORS:
            return self.apply(name)
        if name in Machine.CONSTANTS:
            return self.push(Machine.CONSTANTS[name])
        return type(self).FUNCTIONS[name](self)

    # Pad + Stack

    def enter_or_dup(self):
        '''
        Enter the pad if there is anything on it, else duplicate the top.
        '''
        if self.pad:
            self.enter()
        elif self.stack:
            self.apply(Machine.dup)

    def backspace_or_drop(self):
        '''
        Erase the last pad character if there is one, else drop the top.
        '''
        if self.pad:
            self.pad_backspace()
        else:
            self.apply(Machine.pop)

    def undo(self):
        '''
        Return the stack to its previous snapshot.

        Return True if already at the oldest one kept.
        '''
        oldest = self.store.rollback()
        self._notify()
        return oldest

    # Format

    def _reformat(self, **changes):
        '''
        Replace the format state, entering the pad under the old one first.
        '''
        self._implied_enter()
        self.format_state = self.format_state._replace(**changes)
        self.repository.set_format(self.format_state)
        self._notify()

    def set_mode(self, mode):
        self._reformat(mode=DisplayMode(mode))

    def set_epsilon(self, epsilon):
        self._reformat(epsilon=epsilon)

    def set_decimal_places(self, places):
        places = max(0, min(to_long(places), type(self).MAX_DECIMAL_PLACES))
        self._reformat(decimal_places=places)

    def eps_from(self):
        return self.push(self.format_state.epsilon)

    def dp_from(self):
        return self.push(float(self.format_state.decimal_places))

    def to_eps(self):
        return self.pop1op(self.set_epsilon)

    def to_dp(self):
        return self.pop1op(self.set_decimal_places)

    # Keys that are not Machine operators.
    FUNCTIONS = {
        'enter': enter_or_dup,
        'drop': backspace_or_drop,
        'swap': swap,
        'undo': undo,
        'ee': pad_append_ee,
        'eps_from': eps_from,
        'dp_from': dp_from,
        'to_eps': to_eps,
        'to_dp': to_dp,
    }
