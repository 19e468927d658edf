from pytest import fixture

from rpncalc.calculator import Calculator
from rpncalc.formats import DisplayMode, FormatState
from rpncalc.repository import MemoryRepository


@fixture
def repository():
    return MemoryRepository()


@fixture
def calc(repository):
    '''
    Fresh session: empty stack, empty pad, FLOAT display.
    '''
    return Calculator(repository)


@fixture
def state():
    return FormatState(1e-4, 2, DisplayMode.FLOAT)
