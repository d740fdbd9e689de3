"""
Exchange Package - Exchange action signing modules
Provides the gateway that turns order and cancel instructions into signed
request envelopes for the Hyperliquid exchange.

File: __init__.py
Modified: 2025-07-15
"""

from .exchange_gateway import ExchangeGateway
from .exchange_gateway.modules import (
    AssetDirectory,
    BulkCancel,
    BulkCancelCloid,
    BulkOrder,
    CancelRequest,
    CancelRequestCloid,
    ClientCancelRequest,
    ClientCancelRequestCloid,
    ClientLimit,
    ClientOrderRequest,
    ClientTrigger,
    Limit,
    OrderRequest,
    Trigger,
    action_hash,
    float_to_wire
)

__all__ = [
    'ExchangeGateway',
    'AssetDirectory',
    'BulkCancel',
    'BulkCancelCloid',
    'BulkOrder',
    'CancelRequest',
    'CancelRequestCloid',
    'ClientCancelRequest',
    'ClientCancelRequestCloid',
    'ClientLimit',
    'ClientOrderRequest',
    'ClientTrigger',
    'Limit',
    'OrderRequest',
    'Trigger',
    'action_hash',
    'float_to_wire'
]
