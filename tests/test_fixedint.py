#!/usr/bin/env python
# -*- coding: utf-8 -*-

import math
import unittest

import numpy as np

from pyarbint.base import LIMB_MASK, DivisionByZeroError
from pyarbint.dynint import DynamicInteger
from pyarbint.fixedint import FixedInteger, Int128, Int256, Int512, fixed_type

UINT64_MAX = LIMB_MASK


def make(int_type, num):
    '''
    Build a multi-limb value from a Python int, one 64-bit limb at a time.
    '''
    result = int_type(0)
    for limb in reversed(range(result.length())):
        result = (result << 64) | int_type((num >> (64 * limb)) & LIMB_MASK)
    return result


def sample_values(num_bits, num_random=8, seed=11):
    rng = np.random.default_rng(seed)
    edges = [0, 1, 10, UINT64_MAX, UINT64_MAX + 1, (1 << (num_bits - 1)), (1 << num_bits) - 1]
    rand = []
    for _ in range(num_random):
        num_limbs = int(rng.integers(1, num_bits // 64, endpoint=True))
        limbs = rng.integers(0, LIMB_MASK, size=num_limbs, dtype=np.uint64, endpoint=True)
        rand.append(sum(int(limb) << (64 * i) for i, limb in enumerate(limbs)))
    return edges + rand


class FixedIntegerConstructionTestCase(unittest.TestCase):

    def test_default_is_zero(self):
        a = Int128()
        self.assertEqual(a, Int128(0))
        self.assertFalse(a)
        self.assertEqual(a.limbs(), [0, 0])

    def test_from_native(self):
        self.assertEqual(int(Int128(42)), 42)
        self.assertEqual(int(Int256(UINT64_MAX)), UINT64_MAX)
        self.assertEqual(Int512(100).limbs(), [100] + [0] * 7)
        self.assertEqual(int(Int128(np.uint64(7))), 7)

    def test_negative_sign_extends(self):
        self.assertEqual(Int128(-42).limbs(), [(1 << 64) - 42, UINT64_MAX])
        self.assertEqual(int(Int256(-1)), (1 << 256) - 1)
        self.assertEqual(Int128(-1), ~Int128(0))
        self.assertEqual(Int128(np.int64(-2)), Int128(0) - Int128(2))

    def test_bad_input(self):
        with self.assertRaises(AssertionError):
            Int128(1 << 64)
        with self.assertRaises(AssertionError):
            FixedInteger(1, num_bits=96)
        with self.assertRaises(AssertionError):
            FixedInteger(1, num_bits=64)
        with self.assertRaises(AssertionError):
            Int128(1) + Int256(1)
        with self.assertRaises(TypeError):
            Int128(1) + 1.5

    def test_mixing_with_dynamic(self):
        with self.assertRaises(AssertionError):
            Int128(1) + DynamicInteger(1)
        with self.assertRaises(AssertionError):
            Int128(1) < DynamicInteger(2)
        self.assertFalse(Int128(1) == DynamicInteger(1))

    def test_shape(self):
        a = Int256(3)
        self.assertFalse(a.is_dynamic)
        self.assertEqual(a.length(), 4)
        self.assertEqual(a.bits(), 256)
        self.assertEqual(a.tail(), 3)
        self.assertEqual(make(Int128, (5 << 64) | 9).tail(), 9)

    def test_copies_do_not_alias(self):
        a = Int128(5)
        b = a.copy()
        b += 1
        self.assertEqual(a, 5)
        self.assertEqual(b, 6)
        limbs = a.limbs()
        limbs[0] = 99
        self.assertEqual(a, 5)

    def test_fixed_type(self):
        self.assertIs(fixed_type(128), Int128)
        self.assertIs(fixed_type(1024), fixed_type(1024))
        int1024 = fixed_type(1024)
        self.assertEqual(int1024.__name__, 'Int1024')
        self.assertEqual(int1024(1).length(), 16)
        self.assertEqual(int1024(-1) + int1024(1), int1024(0), 'overflow')
        with self.assertRaises(AssertionError):
            fixed_type(100)


class FixedIntegerMathTestCase(unittest.TestCase):

    def test_carry_into_next_limb(self):
        c = Int128(UINT64_MAX) + Int128(1)
        self.assertTrue(c > Int128(UINT64_MAX))
        self.assertEqual(c, Int128(1) << 64)

    def test_add_sub(self):
        for num_bits, int_type in ((128, Int128), (256, Int256)):
            mod = 1 << num_bits
            values = sample_values(num_bits)
            for a in values:
                for b in values[:6]:
                    self.assertEqual(int(make(int_type, a) + make(int_type, b)), (a + b) % mod)
                    self.assertEqual(int(make(int_type, a) - make(int_type, b)), (a - b) % mod)

    def test_overflow_wraps(self):
        max_value = ~Int128(0)
        self.assertEqual(max_value + Int128(1), Int128(0), 'overflow')
        self.assertEqual(Int128(0) - Int128(1), max_value, '(integer) underflow')
        self.assertEqual(Int128(0) - Int128(1), Int128(-1))
        self.assertEqual((Int128(1) << 120) * Int128(256), Int128(0), 'overflow')

    def test_additive_inverse(self):
        for a in sample_values(256):
            a = make(Int256, a)
            self.assertEqual(a + (~a + Int256(1)), Int256(0))
            self.assertEqual(a + (-a), Int256(0))
            self.assertEqual(-(-a), a)

    def test_identities(self):
        for a in sample_values(128):
            a = make(Int128, a)
            self.assertEqual(a + Int128(0), a)
            self.assertEqual(a * Int128(1), a)
            self.assertEqual(a * Int128(0), Int128(0))
            self.assertEqual(~~a, a)
            self.assertEqual(+a, a)

    def test_mul(self):
        for num_bits, int_type in ((128, Int128), (256, Int256), (512, Int512)):
            mod = 1 << num_bits
            values = sample_values(num_bits)
            for a in values:
                for b in values:
                    self.assertEqual(int(make(int_type, a) * make(int_type, b)), (a * b) % mod)

    def test_factorial(self):
        fact = Int128(1)
        for i in range(2, 35):
            fact *= Int128(i)
        self.assertEqual(int(fact), math.factorial(34))
        fact *= Int128(35)
        self.assertEqual(int(fact), math.factorial(35) % (1 << 128), 'overflow')

    def test_div_mod(self):
        values = sample_values(256, num_random=5)
        for a in values:
            for b in values:
                if b == 0:
                    continue
                q, r = divmod(make(Int256, a), make(Int256, b))
                self.assertEqual((int(q), int(r)), divmod(a, b))
                self.assertEqual(q * make(Int256, b) + r, make(Int256, a))

    def test_div_mod_small(self):
        self.assertEqual(Int128(100) / Int128(7), Int128(14))
        self.assertEqual(Int128(100) // Int128(7), Int128(14))
        self.assertEqual(Int128(100) % Int128(7), Int128(2))
        self.assertEqual(Int128(7) / Int128(100), Int128(0))
        self.assertEqual(Int128(7) % Int128(100), Int128(7))
        self.assertEqual(Int128(42) / Int128(42), Int128(1))
        self.assertEqual((Int128(1) << 100) / (Int128(1) << 36), Int128(1) << 64)
        self.assertEqual(Int128(-1) % Int128(1 << 32), Int128((1 << 32) - 1))

    def test_gcd(self):
        a, b = make(Int256, 2 ** 100 * 3 ** 20), make(Int256, 2 ** 90 * 3 ** 25 * 7)
        while b:
            a, b = b, a % b
        self.assertEqual(int(a), math.gcd(2 ** 100 * 3 ** 20, 2 ** 90 * 3 ** 25 * 7))

    def test_division_by_zero(self):
        a = Int128(42)
        for op in (lambda: a / Int128(0), lambda: a // Int128(0), lambda: a % Int128(0), lambda: divmod(a, Int128(0))):
            with self.assertRaises(DivisionByZeroError):
                op()
        with self.assertRaises(ZeroDivisionError):
            a /= Int128(0)
        with self.assertRaises(ZeroDivisionError):
            a %= Int128(0)
        self.assertEqual(a, Int128(42), 'unmodified by the failed division')

    def test_compound(self):
        a = Int128(10)
        b = a
        a += Int128(5)
        self.assertIs(a, b)
        a -= Int128(3)
        a *= Int128(4)
        self.assertEqual(a, Int128(48))
        a /= Int128(5)
        self.assertEqual(a, Int128(9))
        a %= Int128(4)
        self.assertEqual(a, Int128(1))
        self.assertIs(a, b)

    def test_native_operands(self):
        a = Int128(40)
        self.assertEqual(a + 2, Int128(42))
        self.assertEqual(2 + a, Int128(42))
        self.assertEqual(2 - a, Int128(-38))
        self.assertEqual(3 * a, Int128(120))
        self.assertTrue(a == 40)
        self.assertTrue(a != 41)
        self.assertTrue(a < 41)
        self.assertFalse(a == 'forty')

    def test_wide_native_comparisons(self):
        self.assertFalse(Int128(5) == 2 ** 70)
        self.assertTrue(Int128(5) != 2 ** 70)
        self.assertTrue(Int128(5) < 2 ** 70)
        self.assertTrue(Int128(5) > -(2 ** 70))
        self.assertTrue(Int128(1) << 70 == 2 ** 70)
        self.assertEqual((Int128(1) << 70).compare(2 ** 70), 0)
        self.assertTrue(~Int128(0) >= 2 ** 100)

    def test_reflected_operators(self):
        a = Int128(7)
        self.assertEqual(100 / a, Int128(14))
        self.assertEqual(100 // a, Int128(14))
        self.assertEqual(100 % a, Int128(2))
        self.assertEqual(divmod(100, a), (Int128(14), Int128(2)))
        self.assertEqual(1 << Int128(70), Int128(1) << 70)
        self.assertEqual(1000 >> Int128(3), Int128(125))
        with self.assertRaises(DivisionByZeroError):
            100 / Int128(0)


class FixedIntegerBitsTestCase(unittest.TestCase):

    def test_bitwise(self):
        values = sample_values(256)
        for a in values:
            for b in values:
                fa, fb = make(Int256, a), make(Int256, b)
                self.assertEqual(int(fa & fb), a & b)
                self.assertEqual(int(fa | fb), a | b)
                self.assertEqual(int(fa ^ fb), a ^ b)
            self.assertEqual(int(~make(Int256, a)), ((1 << 256) - 1) ^ a)

    def test_bit_patterns(self):
        a = Int128(0b1010)
        self.assertEqual(a | (Int128(1) << 100), make(Int128, (1 << 100) | 0b1010), 'set bit')
        self.assertEqual(a & ~Int128(0b10), Int128(0b1000), 'clear bit')
        self.assertEqual(a ^ a, Int128(0))
        self.assertEqual(a & -a, Int128(0b10), 'lowest set bit')
        self.assertEqual(a & (a - Int128(1)), Int128(0b1000), 'clear lowest set bit')

    def test_shift(self):
        for num_bits, int_type in ((128, Int128), (256, Int256)):
            mask = (1 << num_bits) - 1
            for a in sample_values(num_bits, num_random=4):
                for shift in (0, 1, 7, 63, 64, 65, 127, 128, num_bits - 1, num_bits, num_bits + 5, 1000):
                    fa = make(int_type, a)
                    self.assertEqual(int(fa << shift), (a << shift) & mask)
                    self.assertEqual(int(fa >> shift), a >> shift)

    def test_shift_inverse(self):
        for a in sample_values(256, num_random=4):
            for shift in range(0, 256, 9):
                fa = make(Int256, a)
                # bits shifted past the top are gone for good
                self.assertEqual((fa << shift) >> shift, fa & (~Int256(0) >> shift))
        self.assertEqual((Int256(12345) << 200) >> 200, Int256(12345))

    def test_shift_by_width_zeroes(self):
        self.assertEqual(Int128(5) << 128, Int128(0))
        self.assertEqual(Int128(-1) >> 128, Int128(0))
        self.assertEqual(Int128(-1) << 500, Int128(0))
        self.assertEqual((Int128(1) << 64).limbs(), [0, 1])
        self.assertEqual((Int128(-1) >> 64).limbs(), [UINT64_MAX, 0])

    def test_compound_shift(self):
        a = Int128(1)
        a <<= 70
        a >>= 3
        self.assertEqual(a, Int128(1) << 67)
        with self.assertRaises(ValueError):
            a <<= -1


class FixedIntegerIncDecTestCase(unittest.TestCase):

    def test_increment(self):
        a = Int128(UINT64_MAX)
        self.assertIs(a.increment(), a)
        self.assertEqual(a.limbs(), [0, 1])
        self.assertEqual(make(Int256, (1 << 192) - 1).increment().limbs(), [0, 0, 0, 1])
        self.assertEqual((~Int128(0)).increment(), Int128(0), 'overflow')

    def test_decrement(self):
        a = Int128(1) << 64
        a.decrement()
        self.assertEqual(a, Int128(UINT64_MAX))
        self.assertEqual(Int128(0).decrement(), ~Int128(0), '(integer) underflow')

    def test_post_forms(self):
        a = Int128(5)
        self.assertEqual(a.post_increment(), Int128(5))
        self.assertEqual(a, Int128(6))
        self.assertEqual(a.post_decrement(), Int128(6))
        self.assertEqual(a, Int128(5))

    def test_round_trip(self):
        a = make(Int256, (1 << 192) - 1)
        b = a.copy()
        b.increment()
        self.assertEqual(b, Int256(1) << 192)
        b.decrement()
        self.assertEqual(b, a)


class FixedIntegerCmpTestCase(unittest.TestCase):

    def test_cmp(self):
        values = sorted(set(sample_values(256)))
        for a in values:
            for b in values:
                fa, fb = make(Int256, a), make(Int256, b)
                self.assertEqual(fa.compare(fb), (a > b) - (a < b))
                self.assertEqual(fa == fb, a == b)
                self.assertEqual(fa < fb, a < b)
                self.assertEqual(fa <= fb, a <= b)
                self.assertEqual(fa > fb, a > b)
                self.assertEqual(fa >= fb, a >= b)

    def test_high_limb_dominates(self):
        self.assertTrue(Int128(1) << 64 > Int128(UINT64_MAX))
        self.assertTrue(Int128(-1) > Int128(0), 'wrapped values are large, not negative')

    def test_bool(self):
        self.assertFalse(Int128(0))
        self.assertTrue(Int128(1))
        self.assertTrue(Int128(-1))
        self.assertTrue(Int128(1) << 127)

    def test_text(self):
        self.assertEqual(str(Int128(12345)), '12345')
        self.assertEqual(repr(Int256(42)), 'uint256(42)')
        self.assertEqual(f"{Int128(255):x}", 'ff')
        self.assertEqual(f"{Int128(1) << 64:,d}", f"{1 << 64:,d}")


if __name__ == '__main__':
    unittest.main()
