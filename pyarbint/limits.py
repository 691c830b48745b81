#!/usr/bin/env python
# -*- coding: utf-8 -*-

import numpy as np


class NumericLimits:
    '''
    Numeric traits of a fixed-width integer type: range, digit counts and the
    flags describing an unsigned, exact, modulo-wrapping integer. Everything
    here is derived from the bit width and the type's zero value; no
    arithmetic of its own is done.
    '''
    is_specialized = True
    is_signed = False
    is_integer = True
    is_exact = True
    has_infinity = False
    has_quiet_NaN = False
    has_signaling_NaN = False
    is_iec559 = False
    is_bounded = True
    is_modulo = True
    max_digits10 = 0
    radix = 2
    min_exponent = 0
    min_exponent10 = 0
    max_exponent = 0
    max_exponent10 = 0
    traps = False
    tinyness_before = False

    def __init__(self, int_type):
        '''
        :param int_type: Fixed-width integer class (or any callable building
        one from a small integer), e.g. `Int128` or `fixed_type(1024)`.
        '''
        zero = int_type(0)
        assert not zero.is_dynamic, "Dynamic-width integers are unbounded and have no numeric limits"
        self.int_type = int_type
        self.digits = zero.bits()
        self.digits10 = int(np.floor(self.digits * np.log10(2)))

    def __repr__(self):
        return f"NumericLimits(digits={self.digits}, digits10={self.digits10})"

    def min(self):
        return self.int_type(0)

    def lowest(self):
        return self.int_type(0)

    def max(self):
        return ~self.int_type(0)


def numeric_limits(int_type):
    return NumericLimits(int_type)
