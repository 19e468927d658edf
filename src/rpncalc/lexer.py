from functools import reduce
import operator

import regex

from .util import ParseError


class Lexer:
    '''
    Lexer for the numbers a user can type into the pad.

    For consistency, for now, needs to be instantiated, despite holding no
    internal state.
    '''
    # Integral part of a number
    INTEGRAL = r'''
                # DO NOT REPEAT ME! I REPEAT MYSELF INTERNALLY!
                (?:
                    [0-9]+
                )
                '''
    # Fractional part of a number
    FRACTIONAL = r'''
                  # DO NOT REPEAT ME! I REPEAT MYSELF INTERNALLY!
                  (?:
                      [0-9]+
                  )
                  '''
    # What the EE key appends, plus digits
    EXPONENT = r'''
                (?:
                    [eE]
                    [+-]?
                    [0-9]+
                )
                '''
    # Decimal number, as in the float() literal minus inf and nan.
    # String formatting and regex is a tricky business, because of the braces.
    # It works here. Be careful in general!
    DECIMAL = r'''
               [+-]?
               (?:
                   (?:
                       # 1, 12, 12. (notice trailing dot), 1.3
                       {INTEGRAL}
                       (?:
                           \.
                           {FRACTIONAL}?
                       )?
                   )|(?:
                       # .2, but not a lone .
                       \.
                       {FRACTIONAL}
                   )
               )
               {EXPONENT}?
               '''.format(INTEGRAL=INTEGRAL,
                          FRACTIONAL=FRACTIONAL,
                          EXPONENT=EXPONENT)
    # Unsigned 64 bit pattern; no 0x prefix, no fraction.
    HEXADECIMAL = r'''
                   [0-9a-fA-F]{1,16}
                   '''

    # Default regex flags for matching lexemes
    FLAGS = reduce(operator.__or__,
                   {regex.VERSION1,
                    regex.VERBOSE},
                   0)

    def lex(self, text, kind='decimal'):
        '''
        Match the whole of text as one number of the given kind.

        Raises ParseError rather than returning a partial match.
        '''
        pattern = getattr(type(self), kind.upper())
        match = regex.fullmatch(pattern, text, flags=type(self).FLAGS)
        if match is None:
            raise ParseError("Couldn't lex {0!r} as {1}".format(text, kind))
        return match

    def isnumber(self, text, kind='decimal'):
        '''
        Return True if text is a complete number of the given kind.
        '''
        try:
            self.lex(text, kind)
        except ParseError:
            return False
        return True
