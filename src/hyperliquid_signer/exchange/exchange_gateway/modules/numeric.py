"""
Numeric Canonicalization Module

Converts float prices and sizes into the decimal strings that are both
hashed and sent on the wire.

The policy is fixed:
- digits come from the shortest repr that round-trips to the same double
- the result is positional, never scientific notation
- trailing fractional zeros and a dangling decimal point are removed
- negative zero is rendered as "0"
- NaN and infinities are rejected
"""

import math
from decimal import Decimal
from numbers import Real

from ....errors import NumericCanonicalizationError


def float_to_wire(x: float) -> str:
    """
    Render a float as its canonical decimal string.
    
    Args:
        x: Price, size or trigger price
        
    Returns:
        Canonical decimal string, e.g. 1.50 -> "1.5", 1e-08 -> "0.00000001"
        
    Raises:
        NumericCanonicalizationError: Value is not a finite real number
    """
    if isinstance(x, bool) or not isinstance(x, Real):
        raise NumericCanonicalizationError(x, "not a real number")
    
    try:
        value = float(x)
    except OverflowError as e:
        raise NumericCanonicalizationError(x, "out of float range") from e
    
    if not math.isfinite(value):
        raise NumericCanonicalizationError(x)
    
    text = format(Decimal(repr(value)), 'f')
    if '.' in text:
        text = text.rstrip('0').rstrip('.')
    
    if text in ('-0', ''):
        return '0'
    return text
