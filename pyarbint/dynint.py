#!/usr/bin/env python
# -*- coding: utf-8 -*-

import logging

import numpy as np

from pyarbint.base import (
    LIMB_BITS, LIMB_MASK, DivisionByZeroError,
    ArbitraryInteger, add_with_carry, sub_with_borrow, multiply_wide, check_native, check_shift, is_native,
)
import pyarbint.codec as codec


class DynamicInteger:
    '''
    Unsigned integers whose limb storage grows and shrinks as values require.
    The limbs are kept in canonical form after every operation: no most
    significant zero limb, except the single limb of the zero value.

    Subtraction still wraps like unsigned arithmetic: taking a larger value
    away leaves the two's complement pattern over the operands' limbs, it does
    not go negative.
    '''
    is_dynamic = True

    def __init__(self, num=0):
        '''
        Initialize the class with a native integer of at most 64 bits. The bit
        pattern is stored as-is in a single limb, a negative value is not sign
        extended into further limbs.
        '''
        self.segments = [check_native(num) & LIMB_MASK]

    def like(self, num):
        return self.__class__(num)

    def copy(self):
        result = self.__class__()
        result.segments = list(self.segments)
        return result

    def length(self):
        return len(self.segments)

    def bits(self):
        return self.length() * LIMB_BITS

    def limbs(self):
        return list(self.segments)

    def tail(self):
        return self.segments[0]

    def trim(self):
        '''
        Drop most significant zero limbs, keeping at least one limb.
        '''
        while len(self.segments) > 1 and self.segments[-1] == 0:
            self.segments.pop()
        return self

    def _resize(self, new_len):
        if new_len > len(self.segments):
            self.segments.extend([0] * (new_len - len(self.segments)))
        else:
            del self.segments[new_len:]

    def _coerce(self, o):
        if isinstance(o, DynamicInteger):
            return o
        if isinstance(o, (int, np.integer)):
            return self.like(o)
        assert not isinstance(o, ArbitraryInteger), f"Cannot mix dynint with '{type(o).__name__}'"
        raise TypeError(f"Unsupported operand type for dynint: '{type(o).__name__}'")

    def __repr__(self):
        return f"dynint({codec.to_string(self)})"

    def __str__(self):
        return codec.to_string(self)

    def __format__(self, *fmt_args):
        return int(self).__format__(*fmt_args)

    def __int__(self):
        return sum(seg << (LIMB_BITS * i) for i, seg in enumerate(self.segments))

    def __bool__(self):
        return any(seg != 0 for seg in self.segments)

    '''
    Canonical form makes the limb count meaningful for ordering: a shorter
    value is always the smaller one.
    '''
    def compare(self, o):
        if isinstance(o, (int, np.integer)) and not is_native(o):
            value = int(self)
            return (value > o) - (value < o)
        o = self._coerce(o)
        if self.length() != o.length():
            return -1 if self.length() < o.length() else 1
        for i in range(self.length() - 1, -1, -1):
            a, b = self.segments[i], o.segments[i]
            if a != b:
                return -1 if a < b else 1
        return 0

    def __eq__(self, o):
        if not isinstance(o, (DynamicInteger, int, np.integer)):
            return NotImplemented
        if isinstance(o, (int, np.integer)) and not is_native(o):
            return int(self) == o
        return self.segments == self._coerce(o).segments

    def __lt__(self, o): return self.compare(o) < 0
    def __le__(self, o): return self.compare(o) <= 0
    def __gt__(self, o): return self.compare(o) > 0
    def __ge__(self, o): return self.compare(o) >= 0

    # unary

    def __pos__(self):
        return self.copy()

    def __neg__(self):
        result = self.__class__()
        result.segments, borrow = [], False
        for seg in self.segments:
            seg, borrow = sub_with_borrow(0, seg, borrow)
            result.segments.append(seg)
        return result.trim()

    def __invert__(self):
        '''
        Complement over the current limbs only, so a high limb of all ones
        turns into a zero limb that is trimmed away.
        '''
        result = self.__class__()
        result.segments = [~seg & LIMB_MASK for seg in self.segments]
        return result.trim()

    # addition grows on a final carry, subtraction wraps and never grows

    def __iadd__(self, o):
        o = self._coerce(o)
        max_len = max(self.length(), o.length())
        self._resize(max_len)
        carry = False
        for i in range(max_len):
            other = o.segments[i] if i < o.length() else 0
            self.segments[i], carry = add_with_carry(self.segments[i], other, carry)
        if carry:
            self.segments.append(1)
        return self.trim()

    def __isub__(self, o):
        o = self._coerce(o)
        max_len = max(self.length(), o.length())
        self._resize(max_len)
        borrow = False
        for i in range(max_len):
            other = o.segments[i] if i < o.length() else 0
            self.segments[i], borrow = sub_with_borrow(self.segments[i], other, borrow)
        return self.trim()

    def __imul__(self, o):
        '''
        Schoolbook multiplication into `len(a) + len(b)` limbs, which always
        holds the full product.
        '''
        o = self._coerce(o)
        result = [0] * (self.length() + o.length())
        for i, seg in enumerate(self.segments):
            carry = 0
            for j, other in enumerate(o.segments):
                if i + j >= len(result):
                    break
                lo, hi = multiply_wide(seg, other)
                lo, c1 = add_with_carry(lo, carry)
                lo, c2 = add_with_carry(lo, result[i + j])
                result[i + j] = lo
                carry = (hi + c1 + c2) & LIMB_MASK
            if i + o.length() < len(result):
                result[i + o.length()] = carry
        self.segments = result
        return self.trim()

    def __itruediv__(self, o):
        self.segments = DynamicInteger.divide(self, self._coerce(o))[0].segments
        return self

    __ifloordiv__ = __itruediv__

    def __imod__(self, o):
        self.segments = DynamicInteger.divide(self, self._coerce(o))[1].segments
        return self

    # bitwise, missing high limbs of the shorter operand count as zero

    def __iand__(self, o):
        o = self._coerce(o)
        self._resize(min(self.length(), o.length()))
        for i in range(self.length()):
            self.segments[i] &= o.segments[i]
        return self.trim()

    def __ior__(self, o):
        o = self._coerce(o)
        self._resize(max(self.length(), o.length()))
        for i, other in enumerate(o.segments):
            self.segments[i] |= other
        return self.trim()

    def __ixor__(self, o):
        o = self._coerce(o)
        self._resize(max(self.length(), o.length()))
        for i, other in enumerate(o.segments):
            self.segments[i] ^= other
        return self.trim()

    def __ilshift__(self, shift):
        '''
        Left shift never truncates: the value gets one more limb when the bits
        shifted out of the top limb are nonzero.
        '''
        shift = check_shift(shift)
        if shift == 0:
            return self

        seg_shift, bit_shift = divmod(shift, LIMB_BITS)
        segs = self.segments
        old_len = len(segs)
        new_len = old_len + seg_shift
        if bit_shift > 0 and segs[old_len - 1] >> (LIMB_BITS - bit_shift):
            new_len += 1
        self._resize(new_len)

        if bit_shift == 0:
            for i in range(new_len - 1, seg_shift - 1, -1):
                segs[i] = segs[i - seg_shift]
        else:
            for i in range(new_len - 1, seg_shift, -1):
                src_idx = i - seg_shift
                seg = (segs[src_idx] << bit_shift) & LIMB_MASK
                if src_idx > 0:
                    seg |= segs[src_idx - 1] >> (LIMB_BITS - bit_shift)
                segs[i] = seg
            segs[seg_shift] = (segs[0] << bit_shift) & LIMB_MASK
        for i in range(seg_shift):
            segs[i] = 0
        return self.trim()

    def __irshift__(self, shift):
        shift = check_shift(shift)
        if shift == 0:
            return self

        seg_shift, bit_shift = divmod(shift, LIMB_BITS)
        if seg_shift >= self.length():
            self.segments = [0]
            return self

        segs = self.segments
        new_len = len(segs) - seg_shift
        if bit_shift == 0:
            for i in range(new_len):
                segs[i] = segs[i + seg_shift]
        else:
            for i in range(new_len - 1):
                segs[i] = (segs[i + seg_shift] >> bit_shift) | \
                    ((segs[i + seg_shift + 1] << (LIMB_BITS - bit_shift)) & LIMB_MASK)
            segs[new_len - 1] = segs[-1] >> bit_shift
        self._resize(new_len)
        return self.trim()

    def __add__(self, o): return self.copy().__iadd__(o)
    def __sub__(self, o): return self.copy().__isub__(o)
    def __mul__(self, o): return self.copy().__imul__(o)
    def __truediv__(self, o): return DynamicInteger.divide(self, self._coerce(o))[0]
    def __floordiv__(self, o): return DynamicInteger.divide(self, self._coerce(o))[0]
    def __mod__(self, o): return DynamicInteger.divide(self, self._coerce(o))[1]
    def __divmod__(self, o): return DynamicInteger.divide(self, self._coerce(o))
    def __and__(self, o): return self.copy().__iand__(o)
    def __or__(self, o): return self.copy().__ior__(o)
    def __xor__(self, o): return self.copy().__ixor__(o)
    def __lshift__(self, shift): return self.copy().__ilshift__(shift)
    def __rshift__(self, shift): return self.copy().__irshift__(shift)

    def __radd__(self, o): return self._coerce(o) + self
    def __rsub__(self, o): return self._coerce(o) - self
    def __rmul__(self, o): return self._coerce(o) * self
    def __rfloordiv__(self, o): return self._coerce(o) // self
    def __rtruediv__(self, o): return self._coerce(o) / self
    def __rmod__(self, o): return self._coerce(o) % self
    def __rdivmod__(self, o): return divmod(self._coerce(o), self)
    def __rlshift__(self, o): return self._coerce(o) << int(self)
    def __rrshift__(self, o): return self._coerce(o) >> int(self)
    def __rand__(self, o): return self._coerce(o) & self
    def __ror__(self, o): return self._coerce(o) | self
    def __rxor__(self, o): return self._coerce(o) ^ self

    def increment(self):
        for i in range(self.length()):
            self.segments[i] = (self.segments[i] + 1) & LIMB_MASK
            if self.segments[i] != 0:
                return self
        # carried out of every limb
        self.segments.append(1)
        return self

    def decrement(self):
        for i in range(self.length()):
            old = self.segments[i]
            self.segments[i] = (old - 1) & LIMB_MASK
            if old != 0:
                break
        return self.trim()

    def post_increment(self):
        old = self.copy()
        self.increment()
        return old

    def post_decrement(self):
        old = self.copy()
        self.decrement()
        return old

    @staticmethod
    def divide(dividend, divisor):
        '''
        Restoring binary long division over all `dividend.bits()` bits. The
        quotient grows only as its high bits get set; quotient and remainder
        are both returned trimmed.
        '''
        if not divisor:
            logging.debug(f"Refusing to divide a {dividend.length():,d}-limb integer by zero.")
            raise DivisionByZeroError()

        quotient, remainder = DynamicInteger(), DynamicInteger()
        for bit_idx in range(dividend.bits() - 1, -1, -1):
            seg_idx, bit_in_seg = divmod(bit_idx, LIMB_BITS)
            remainder <<= 1
            if seg_idx < dividend.length() and (dividend.segments[seg_idx] >> bit_in_seg) & 1:
                remainder.segments[0] |= 1
            if remainder >= divisor:
                remainder -= divisor
                if seg_idx >= quotient.length():
                    quotient._resize(seg_idx + 1)
                quotient.segments[seg_idx] |= 1 << bit_in_seg
        return quotient.trim(), remainder.trim()
