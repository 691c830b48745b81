#!/usr/bin/env python
# -*- coding: utf-8 -*-

import collections
import logging
from typing import Protocol, runtime_checkable

'''
Stateless limb-level functions that are used throughout the fixed-width and
dynamic-width integer classes, plus the pieces both of them share at the API
boundary.
'''

LIMB_BITS = 64
LIMB_MASK = (1 << LIMB_BITS) - 1  # 0xFFFF_FFFF_FFFF_FFFF
HALF_BITS = 32
HALF_MASK = (1 << HALF_BITS) - 1

# range of native (at most 64-bit) integers accepted by the constructors
MIN_NATIVE, MAX_NATIVE = -(1 << (LIMB_BITS - 1)), LIMB_MASK


def add_with_carry(a, b, carry_in=False):
    '''
    Add two 64-bit limbs and an incoming carry. Returns the wrapped 64-bit sum
    and whether the unsigned sum overflowed the limb.
    '''
    result = (a + b + (1 if carry_in else 0)) & LIMB_MASK
    return result, result < a or (carry_in and result == a)


def sub_with_borrow(a, b, borrow_in=False):
    '''
    Subtract limb `b` and an incoming borrow from limb `a`. Returns the wrapped
    64-bit difference and whether a borrow out of the limb occurred.
    '''
    result = (a - b - (1 if borrow_in else 0)) & LIMB_MASK
    return result, b > a or (borrow_in and b == a)


def multiply_wide(a, b):
    '''
    Full 128-bit product of two 64-bit limbs, as a (low64, high64) pair. Works
    on 32-bit halves so that no partial product ever needs more than 64 bits.
    '''
    a_lo, a_hi = a & HALF_MASK, a >> HALF_BITS
    b_lo, b_hi = b & HALF_MASK, b >> HALF_BITS

    p0 = a_lo * b_lo
    p1 = a_lo * b_hi
    p2 = a_hi * b_lo
    p3 = a_hi * b_hi

    # p1 plus the top half of p0 always fits, adding p2 may wrap once
    mid = p1 + (p0 >> HALF_BITS)
    mid = (mid + p2) & LIMB_MASK
    carry = 1 if mid < p1 else 0

    lo = ((mid << HALF_BITS) & LIMB_MASK) | (p0 & HALF_MASK)
    hi = (p3 + (mid >> HALF_BITS) + (carry << HALF_BITS)) & LIMB_MASK
    return lo, hi


def check_native(num):
    '''
    Convert a native integer (Python int or numpy integer scalar) with the
    top-level int() call, and check that it fits in a single 64-bit word.
    '''
    int_num = int(num)
    assert MIN_NATIVE <= int_num <= MAX_NATIVE, f"Value {int_num} out-of-range for a {LIMB_BITS:d}-bit native integer"
    return int_num


def is_native(num):
    return MIN_NATIVE <= int(num) <= MAX_NATIVE


def check_shift(shift):
    shift = int(shift)
    if shift < 0:
        raise ValueError("negative shift count")
    return shift


class DivisionByZeroError(ZeroDivisionError):
    '''
    Raised by the division and modulo operators of both integer flavours when
    the divisor is the zero value.
    '''

    def __init__(self, msg="Division by zero"):
        super().__init__(msg)


@runtime_checkable
class ArbitraryInteger(Protocol):
    '''
    The operation set shared by `FixedInteger` and `DynamicInteger`. Neither
    class inherits from the other; generic code like the decimal codec is
    written against this protocol only.
    '''
    is_dynamic: bool

    def like(self, num): ...
    def tail(self): ...
    def length(self): ...
    def bits(self): ...
    def compare(self, o): ...
    def __bool__(self): ...
    def __add__(self, o): ...
    def __sub__(self, o): ...
    def __mul__(self, o): ...
    def __floordiv__(self, o): ...
    def __mod__(self, o): ...
    def __and__(self, o): ...
    def __or__(self, o): ...
    def __xor__(self, o): ...
    def __lshift__(self, shift): ...
    def __rshift__(self, shift): ...
    def __invert__(self): ...


class DivModResult(collections.namedtuple('DivModResult', ['quotient', 'remainder', 'error'])):
    '''
    Tagged outcome of `checked_divmod()`: either a quotient and remainder with
    no error, or no values and the division error.
    '''
    __slots__ = ()

    @property
    def ok(self):
        return self.error is None


def checked_divmod(a, b):
    '''
    Divide without raising: a zero divisor is reported through the `error`
    field of the result instead of propagating out of the call.
    '''
    try:
        quotient, remainder = divmod(a, b)
    except DivisionByZeroError as e:
        logging.debug(f"Checked division of {a!r} reported '{e}'.")
        return DivModResult(None, None, e)
    return DivModResult(quotient, remainder, None)
