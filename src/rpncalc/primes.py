'''
Prime factorization by trial division.

Inputs are numbers a person typed into a calculator, so plain trial
division up to the square root of the remaining cofactor is enough.
'''


def factorize(n):
    '''
    Return (sign, factors) for integer n.

    factors is a list of (prime, exponent) pairs in ascending prime order.
    0, 1 and -1 have no factors. sign is -1 for negative n, 1 otherwise.
    '''
    sign = -1 if n < 0 else 1
    a = abs(n)
    factors = []
    candidate = 2
    while candidate * candidate <= a:
        exponent = 0
        while a % candidate == 0:
            a //= candidate
            exponent += 1
        if exponent:
            factors.append((candidate, exponent))
        candidate += 1 if candidate == 2 else 2
    if a > 1:
        # Whatever survives the loop is prime
        factors.append((a, 1))
    return sign, factors


def render_factor(prime, exponent, power='^'):
    if exponent == 1:
        return str(prime)
    return '{}{}{}'.format(prime, power, exponent)


def prime_string(n, times='*', power='^'):
    '''
    Render the factorization of n, e.g. -12 -> '-2^2*3'.

    0 and 1 have no factors and render as themselves.
    '''
    sign, factors = factorize(n)
    prefix = '-' if sign < 0 else ''
    if not factors:
        return prefix + str(abs(n))
    return prefix + times.join(render_factor(prime, exponent, power)
                               for prime, exponent
                               in factors)
