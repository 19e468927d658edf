from functools import wraps


class RPNError(Exception):
    pass


class ParseError(RPNError, ValueError):
    '''
    Text typed into the pad is not a number in the active display mode.
    '''


class StackUnderflow(RPNError, IndexError):
    '''
    Not enough elements on the stack for the requested operation.
    '''


class LogCorruption(RPNError):
    '''
    Stored snapshot rows failed the consistency check.
    '''


def wrap_user_errors(fmt, error=RPNError):
    '''
    Decorator that converts unexpected exceptions into RPNErrors.

    Passes through RPNErrors. The message is ``fmt`` formatted with the
    wrapped function's arguments.
    '''
    def decorator(f):
        @wraps(f)
        def wrapper(*args, **kwargs):
            try:
                return f(*args, **kwargs)
            except RPNError:
                raise
            except Exception as e:
                raise error(fmt.format(*args, **kwargs), e) from e
        return wrapper
    return decorator
