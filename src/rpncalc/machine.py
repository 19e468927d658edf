from collections import deque
from inspect import signature as getsignature, Parameter
import math

from . import ops
from .util import StackUnderflow


class Machine:
    '''
    Working copy of the operand stack (RPN calculator).

    Materialized from a snapshot, mutated by one operation, and handed back
    as a new snapshot. Index 0 is the top of the stack.
    '''

    # Operators, by name, on the items of a machine.
    OPERATORS = {
        # Arithmetic
        'add': ops.add,
        'sub': ops.sub,
        'mul': ops.mul,
        'div': ops.div,
        'mod': ops.mod,
        'y_pow_x': ops.y_pow_x,
        'chs': ops.chs,
        'inv': ops.inv,
        'times2': ops.times2,
        'div2': ops.div2,

        # Powers and logarithms
        'sqrt': ops.sqrt,
        'exp': ops.exp,
        'ln': ops.ln,
        'log10': ops.log10,
        'log2': ops.log2,
        'pow10': ops.pow10,
        'pow2': ops.pow2,

        # Rounding
        'floor': ops.floor,
        'ceil': ops.ceil,
        'round': ops.round_,

        # Trigonometry
        'sin': ops.sin,
        'cos': ops.cos,
        'tan': ops.tan,
        'asin': ops.asin,
        'acos': ops.acos,
        'atan': ops.atan,
        'deg_to_rad': ops.deg_to_rad,
        'rad_to_deg': ops.rad_to_deg,

        # Integer and bitwise
        'and': ops.and_,
        'or': ops.or_,
        'xor': ops.xor,
        'not': ops.not_,
        'gcd': ops.gcd,
        'lcm': ops.lcm,
        'sign_crop': ops.sign_crop,
        'sign_extend': ops.sign_extend,
    }

    CONSTANTS = {
        'pi': math.pi,
    }

    def __init__(self, values=()):
        '''
        Create a working stack holding values, top of the stack first.
        '''
        self.stack = deque(values)

    def __len__(self):
        return len(self.stack)

    def __getitem__(self, depth):
        return self.stack[depth]

    def values(self):
        '''
        Return the stack as a tuple, top of the stack first.
        '''
        return tuple(self.stack)

    def hasdepth(self, n):
        return len(self.stack) >= n

    def isempty(self):
        return not self.hasdepth(1)

    def _arity(self, f):
        '''
        Return number of non-default positional arguments.
        '''
        parameters = getsignature(f).parameters.values()
        positionals = [parameter
                       for parameter
                       in parameters
                       if parameter.kind == Parameter.POSITIONAL_OR_KEYWORD and
                          parameter.default == Parameter.empty]
        return len(positionals)

    def push(self, *new):
        '''
        Push all elements onto stack, rightmost on top.
        '''
        self.stack.extendleft(new)

    def _popstack(self, n=1):
        '''
        Pop specified number of args from stack, topmost first.

        Raise StackUnderflow, leaving the stack alone, if not enough args.
        '''
        if len(self.stack) < n:
            raise StackUnderflow('Less than {} element(s) on stack'.format(n))
        return [self.stack.popleft() for _ in range(n)]

    def pop(self):
        return self._popstack()[0]

    def pick(self, depth):
        '''
        Duplicate the element at depth onto the top of the stack.
        '''
        if not 0 <= depth < len(self.stack):
            raise StackUnderflow('No element at depth {}'.format(depth))
        self.push(self.stack[depth])

    def dup(self):
        self.pick(0)

    def swap(self):
        '''
        Swap two elements at top of stack.
        '''
        b, a = self._popstack(2)
        self.push(b, a)

    def apply(self, f):
        '''
        Pop as many operands as f takes, and push its result.

        The deepest operand is the first argument: 9 2 sub is 9 - 2.
        '''
        args = reversed(self._popstack(self._arity(f)))
        self.push(float(f(*args)))

    def binop(self, f):
        b, a = self._popstack(2)
        self.push(float(f(a, b)))

    def unop(self, f):
        self.push(float(f(self.pop())))

    def operate(self, name):
        '''
        Apply the operator with this name.
        '''
        self.apply(type(self).OPERATORS[name])
