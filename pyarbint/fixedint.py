#!/usr/bin/env python
# -*- coding: utf-8 -*-

import functools
import logging

import numpy as np

from pyarbint.base import (
    LIMB_BITS, LIMB_MASK, DivisionByZeroError,
    ArbitraryInteger, add_with_carry, sub_with_borrow, multiply_wide, check_native, check_shift, is_native,
)
import pyarbint.codec as codec


class FixedInteger:
    '''
    Fixed-width unsigned integers wider than a machine word, integers that
    explicitly under- or over-flow according to a particular number of bits.
    The value is held as exactly `num_bits // 64` limbs of 64 bits, least
    significant first, and every operation wraps modulo 2 ** num_bits.
    '''
    is_dynamic = False

    def __init__(self, num=0, num_bits=128):
        '''
        Initialize the class with a native integer of at most 64 bits and a
        particular bit size.
        :param num: Integer value. A negative value is stored as its two's
        complement across all the limbs, i.e. the high limbs are all ones.
        :param num_bits: Number of bits for this unsigned integer, a power of
        two above 64. Defaults to 128.
        '''
        assert num_bits > LIMB_BITS and (num_bits & (num_bits - 1)) == 0, \
            f"Width of {num_bits:,d} bits is not a power of two above {LIMB_BITS:d}"
        int_num = check_native(num)
        self.num_bits = num_bits
        self.segments = np.zeros(num_bits // LIMB_BITS, dtype=np.uint64)
        self.segments[0] = int_num & LIMB_MASK
        if int_num < 0:
            self.segments[1:] = LIMB_MASK

    def like(self, num):
        return self.__class__(num, num_bits=self.num_bits)

    def copy(self):
        result = self.like(0)
        result.segments[:] = self.segments
        return result

    def length(self):
        return len(self.segments)

    def bits(self):
        return self.length() * LIMB_BITS

    def limbs(self):
        return self.segments.tolist()

    def tail(self):
        '''
        Lowest 64 bits of the value, as a native int.
        '''
        return int(self.segments[0])

    def _store(self, segs):
        self.segments[:] = np.array(segs, dtype=np.uint64)
        return self

    def _coerce(self, o):
        if isinstance(o, FixedInteger):
            assert o.num_bits == self.num_bits, f"Cannot mix {self.num_bits:,d}-bit and {o.num_bits:,d}-bit integers"
            return o
        if isinstance(o, (int, np.integer)):
            return self.like(o)
        assert not isinstance(o, ArbitraryInteger), f"Cannot mix uint{self.num_bits} with '{type(o).__name__}'"
        raise TypeError(f"Unsupported operand type for uint{self.num_bits}: '{type(o).__name__}'")

    def __repr__(self):
        return f"uint{self.num_bits}({codec.to_string(self)})"

    def __str__(self):
        return codec.to_string(self)

    def __format__(self, *fmt_args):
        '''
        Just use the underlying Python int()'s formatting.
        '''
        return int(self).__format__(*fmt_args)

    def __int__(self):
        return sum(seg << (LIMB_BITS * i) for i, seg in enumerate(self.limbs()))

    def __bool__(self):
        return bool(self.segments.any())

    '''
    Ordering walks the limbs from the most significant one down.
    '''
    def compare(self, o):
        if isinstance(o, (int, np.integer)) and not is_native(o):
            value = int(self)
            return (value > o) - (value < o)
        o = self._coerce(o)
        a, b = self.limbs(), o.limbs()
        for i in range(len(a) - 1, -1, -1):
            if a[i] != b[i]:
                return -1 if a[i] < b[i] else 1
        return 0

    def __eq__(self, o):
        if not isinstance(o, (FixedInteger, int, np.integer)):
            return NotImplemented
        if isinstance(o, (int, np.integer)) and not is_native(o):
            # too wide to construct from, compare the represented integer
            return int(self) == o
        o = self._coerce(o)
        return bool(np.array_equal(self.segments, o.segments))

    def __lt__(self, o): return self.compare(o) < 0
    def __le__(self, o): return self.compare(o) <= 0
    def __gt__(self, o): return self.compare(o) > 0
    def __ge__(self, o): return self.compare(o) >= 0

    # unary

    def __pos__(self):
        return self.copy()

    def __neg__(self):
        out, borrow = [], False
        for seg in self.limbs():
            seg, borrow = sub_with_borrow(0, seg, borrow)
            out.append(seg)
        return self.like(0)._store(out)

    def __invert__(self):
        result = self.like(0)
        result.segments[:] = ~self.segments
        return result

    # addition and subtraction, the carry or borrow out of the top limb is dropped

    def __iadd__(self, o):
        o = self._coerce(o)
        segs, other = self.limbs(), o.limbs()
        carry = False
        for i in range(len(segs)):
            segs[i], carry = add_with_carry(segs[i], other[i], carry)
        return self._store(segs)

    def __isub__(self, o):
        o = self._coerce(o)
        segs, other = self.limbs(), o.limbs()
        borrow = False
        for i in range(len(segs)):
            segs[i], borrow = sub_with_borrow(segs[i], other[i], borrow)
        return self._store(segs)

    def __imul__(self, o):
        '''
        Schoolbook multiplication. Partial products that would land at or
        beyond the top limb are never formed, which truncates the product
        modulo 2 ** num_bits.
        '''
        o = self._coerce(o)
        segs, other = self.limbs(), o.limbs()
        n = len(segs)
        result = [0] * n
        for i in range(n):
            carry = 0
            for j in range(n - i):
                lo, hi = multiply_wide(segs[i], other[j])
                lo, c1 = add_with_carry(lo, carry)
                lo, c2 = add_with_carry(lo, result[i + j])
                result[i + j] = lo
                carry = (hi + c1 + c2) & LIMB_MASK
        return self._store(result)

    def __itruediv__(self, o):
        quotient, _ = FixedInteger.divide(self, self._coerce(o))
        self.segments[:] = quotient.segments
        return self

    __ifloordiv__ = __itruediv__

    def __imod__(self, o):
        _, remainder = FixedInteger.divide(self, self._coerce(o))
        self.segments[:] = remainder.segments
        return self

    # bitwise

    def __iand__(self, o):
        np.bitwise_and(self.segments, self._coerce(o).segments, out=self.segments)
        return self

    def __ior__(self, o):
        np.bitwise_or(self.segments, self._coerce(o).segments, out=self.segments)
        return self

    def __ixor__(self, o):
        np.bitwise_xor(self.segments, self._coerce(o).segments, out=self.segments)
        return self

    def __ilshift__(self, shift):
        shift = check_shift(shift)
        segs = self.limbs()
        n = len(segs)
        if shift >= self.num_bits:
            return self._store([0] * n)

        seg_shift, bit_shift = divmod(shift, LIMB_BITS)
        if bit_shift == 0:
            for i in range(n - 1, seg_shift - 1, -1):
                segs[i] = segs[i - seg_shift]
        else:
            for i in range(n - 1, seg_shift, -1):
                segs[i] = ((segs[i - seg_shift] << bit_shift) & LIMB_MASK) | \
                    (segs[i - seg_shift - 1] >> (LIMB_BITS - bit_shift))
            segs[seg_shift] = (segs[0] << bit_shift) & LIMB_MASK
        for i in range(seg_shift):
            segs[i] = 0
        return self._store(segs)

    def __irshift__(self, shift):
        '''
        Logical right shift, the vacated high bits are always zero.
        '''
        shift = check_shift(shift)
        segs = self.limbs()
        n = len(segs)
        if shift >= self.num_bits:
            return self._store([0] * n)

        seg_shift, bit_shift = divmod(shift, LIMB_BITS)
        if bit_shift == 0:
            for i in range(n - seg_shift):
                segs[i] = segs[i + seg_shift]
        else:
            for i in range(n - seg_shift - 1):
                segs[i] = (segs[i + seg_shift] >> bit_shift) | \
                    ((segs[i + seg_shift + 1] << (LIMB_BITS - bit_shift)) & LIMB_MASK)
            segs[n - seg_shift - 1] = segs[n - 1] >> bit_shift
        for i in range(n - seg_shift, n):
            segs[i] = 0
        return self._store(segs)

    '''
    The binary operators work on a copy of the left operand and defer to the
    in-place forms above.
    '''
    def __add__(self, o): return self.copy().__iadd__(o)
    def __sub__(self, o): return self.copy().__isub__(o)
    def __mul__(self, o): return self.copy().__imul__(o)
    def __truediv__(self, o): return FixedInteger.divide(self, self._coerce(o))[0]
    def __floordiv__(self, o): return FixedInteger.divide(self, self._coerce(o))[0]
    def __mod__(self, o): return FixedInteger.divide(self, self._coerce(o))[1]
    def __divmod__(self, o): return FixedInteger.divide(self, self._coerce(o))
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

    # increment and decrement, rippling only as far as the carry or borrow goes

    def increment(self):
        segs = self.limbs()
        for i in range(len(segs)):
            segs[i] = (segs[i] + 1) & LIMB_MASK
            if segs[i] != 0:
                break
        return self._store(segs)

    def decrement(self):
        segs = self.limbs()
        for i in range(len(segs)):
            old = segs[i]
            segs[i] = (old - 1) & LIMB_MASK
            if old != 0:
                break
        return self._store(segs)

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
        Restoring binary long division, one bit at a time from the most
        significant bit down. Returns a (quotient, remainder) pair and leaves
        both operands untouched.
        '''
        if not divisor:
            logging.debug(f"Refusing to divide a {dividend.num_bits:,d}-bit integer by zero.")
            raise DivisionByZeroError()

        dividend_segs = dividend.limbs()
        quotient = [0] * len(dividend_segs)
        remainder = dividend.like(0)
        for bit_idx in range(dividend.num_bits - 1, -1, -1):
            seg_idx, bit_in_seg = divmod(bit_idx, LIMB_BITS)
            remainder <<= 1
            if (dividend_segs[seg_idx] >> bit_in_seg) & 1:
                remainder.segments[0] |= np.uint64(1)
            if remainder >= divisor:
                remainder -= divisor
                quotient[seg_idx] |= 1 << bit_in_seg
        return dividend.like(0)._store(quotient), remainder


class Int128(FixedInteger):
    """
    Class for a common 128-bit unsigned integer type.
    """

    def __init__(self, num=0, num_bits=128):
        super().__init__(num, num_bits=num_bits)


class Int256(FixedInteger):
    """
    Class for a common 256-bit unsigned integer type.
    """

    def __init__(self, num=0, num_bits=256):
        super().__init__(num, num_bits=num_bits)


class Int512(FixedInteger):
    """
    Class for a common 512-bit unsigned integer type.
    """

    def __init__(self, num=0, num_bits=512):
        super().__init__(num, num_bits=num_bits)


_COMMON_TYPES = {128: Int128, 256: Int256, 512: Int512}


@functools.lru_cache(maxsize=None)
def fixed_type(num_bits):
    '''
    Return the fixed-width integer class for a particular bit size, building
    (and caching) a new `Int<num_bits>` subclass for uncommon widths.
    '''
    if num_bits in _COMMON_TYPES:
        return _COMMON_TYPES[num_bits]
    assert num_bits > LIMB_BITS and (num_bits & (num_bits - 1)) == 0, \
        f"Width of {num_bits:,d} bits is not a power of two above {LIMB_BITS:d}"
    logging.debug(f"Creating fixed-width integer type for {num_bits:,d} bits.")

    def __init__(self, num=0, num_bits=num_bits):
        FixedInteger.__init__(self, num, num_bits=num_bits)

    return type(f"Int{num_bits}", (FixedInteger,), {
        '__init__': __init__,
        '__doc__': f"Class for a {num_bits:,d}-bit unsigned integer type.",
    })
