"""Signed action envelopes for the Hyperliquid exchange"""
__version__ = "1.0.0"

from .errors import (
    HyperliquidSignerError,
    EncodingError,
    NumericCanonicalizationError,
    DigestConstructionError,
    SigningError,
    SerializationError,
    UnknownAssetError
)
from .exchange import ExchangeGateway
from .exchange.exchange_gateway import bulk_cancel, bulk_cancel_by_oid, bulk_order, connect_agent
from .signature import EthChain, Signature, load_wallet, sign_l1_action, sign_with_agent

__all__ = [
    'HyperliquidSignerError',
    'EncodingError',
    'NumericCanonicalizationError',
    'DigestConstructionError',
    'SigningError',
    'SerializationError',
    'UnknownAssetError',
    'ExchangeGateway',
    'bulk_cancel',
    'bulk_cancel_by_oid',
    'bulk_order',
    'connect_agent',
    'EthChain',
    'Signature',
    'load_wallet',
    'sign_l1_action',
    'sign_with_agent'
]
