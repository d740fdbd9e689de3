"""
Error types raised by the signing pipeline.

None of these are transient. Each one reflects a defect in the input or the
configuration, so callers should fix the input instead of retrying.
"""


class HyperliquidSignerError(Exception):
    """Base class for all signing pipeline errors"""


class EncodingError(HyperliquidSignerError):
    """Action, nonce or vault address cannot be canonically encoded"""


class NumericCanonicalizationError(HyperliquidSignerError, ValueError):
    """Float value has no canonical wire representation"""

    def __init__(self, value, reason: str = "non-finite value"):
        super().__init__(f"Cannot canonicalize {value!r}: {reason}")
        self.value = value


class DigestConstructionError(HyperliquidSignerError):
    """Typed-data digest could not be built from the domain and message"""


class SigningError(HyperliquidSignerError):
    """Private key is malformed or the signature could not be produced"""


class SerializationError(HyperliquidSignerError):
    """Signed envelope cannot be rendered to JSON"""


class UnknownAssetError(HyperliquidSignerError, KeyError):
    """Asset symbol is not present in the asset directory"""

    def __init__(self, symbol: str):
        super().__init__(f"Unknown asset symbol: {symbol}")
        self.symbol = symbol

    def __str__(self):
        return self.args[0]
