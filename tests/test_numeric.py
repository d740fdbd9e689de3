import random
import unittest

from hyperliquid_signer.errors import NumericCanonicalizationError
from hyperliquid_signer.exchange import float_to_wire


class TestFloatToWire(unittest.TestCase):
    """Test canonical float rendering"""
    
    def test_known_values(self):
        """Test fixed vectors"""
        cases = {
            1.0: "1",
            0.1: "0.1",
            1.5: "1.5",
            100.0: "100",
            -2.5: "-2.5",
            1670.1: "1670.1",
            0.0147: "0.0147",
            1e-8: "0.00000001",
            1.5e-8: "0.000000015",
            1e9: "1000000000",
            123456789.123: "123456789.123",
            0.1 + 0.2: "0.30000000000000004",
            1e22: "10000000000000000000000",
        }
        for value, expected in cases.items():
            self.assertEqual(float_to_wire(value), expected, value)
    
    def test_zero(self):
        """Test zero and negative zero both render as 0"""
        self.assertEqual(float_to_wire(0.0), "0")
        self.assertEqual(float_to_wire(-0.0), "0")
        self.assertEqual(float_to_wire(0), "0")
    
    def test_integers(self):
        """Test ints are accepted as prices"""
        self.assertEqual(float_to_wire(3), "3")
        self.assertEqual(float_to_wire(30000), "30000")
    
    def test_tiny_magnitude_is_positional(self):
        """Test subnormal values never use scientific notation"""
        text = float_to_wire(5e-324)
        self.assertNotIn('e', text.lower())
        self.assertTrue(text.startswith("0.000"))
        self.assertEqual(float(text), 5e-324)
    
    def test_rejects_non_finite(self):
        """Test NaN and infinities are typed errors"""
        for value in (float('nan'), float('inf'), float('-inf')):
            with self.assertRaises(NumericCanonicalizationError):
                float_to_wire(value)
    
    def test_rejects_non_numbers(self):
        """Test bools, strings and oversized ints are rejected"""
        for value in (True, "1.0", None, 10 ** 400):
            with self.assertRaises(NumericCanonicalizationError):
                float_to_wire(value)
    
    def test_error_is_value_error(self):
        """Test callers catching ValueError still see canonicalization failures"""
        with self.assertRaises(ValueError):
            float_to_wire(float('nan'))
    
    def test_round_trip_trading_range(self):
        """Test parse(canonicalize(x)) == x across 1e-8 .. 1e9"""
        rng = random.Random(1337)
        for _ in range(2000):
            value = 10 ** rng.uniform(-8, 9)
            text = float_to_wire(value)
            self.assertNotIn('e', text)
            self.assertEqual(float(text), value)
            if '.' in text:
                self.assertFalse(text.endswith('0'))
    
    def test_deterministic(self):
        """Test repeated calls return identical strings"""
        self.assertEqual(float_to_wire(0.3), float_to_wire(0.3))


if __name__ == '__main__':
    unittest.main()
