#!/usr/bin/env python
# -*- coding: utf-8 -*-

import logging

'''
Base-10 text conversion for both integer flavours. Only the shared operation
set is used here (construction from small integers, multiply, add, modulo and
divide by ten, truthiness), so the same functions serve every width.
'''

DIGITS = '0123456789'


def to_string(value):
    '''
    Decimal representation of a fixed- or dynamic-width integer, by repeated
    division by ten.
    '''
    if not value:
        return '0'

    digits = []
    temp = value.copy()
    ten = value.like(10)
    while temp:
        digit = temp % ten
        digits.append(DIGITS[digit.tail()])
        temp //= ten
    return ''.join(reversed(digits))


def from_string(text, int_type):
    '''
    Parse decimal text into a value built by `int_type`, e.g. `Int256`,
    `fixed_type(1024)` or `DynamicInteger`. Leading zeros are accepted; there
    is no sign or radix prefix. Returns None for empty text or any character
    outside '0'-'9'.
    '''
    if not text:
        logging.debug("Rejecting empty decimal text.")
        return None

    result = int_type(0)
    ten = result.like(10)
    for c in text:
        if c not in DIGITS:
            logging.debug(f"Rejecting decimal text '{text}' at character {c!r}.")
            return None
        result *= ten
        result += result.like(DIGITS.index(c))
    return result
