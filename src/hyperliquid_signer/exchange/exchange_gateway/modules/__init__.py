"""Exchange gateway modules initialization"""

from .numeric import float_to_wire
from .asset_directory import AssetDirectory
from .order_types import (
    Limit,
    Trigger,
    OrderRequest,
    ClientLimit,
    ClientTrigger,
    ClientOrderRequest,
    CancelRequest,
    CancelRequestCloid,
    ClientCancelRequest,
    ClientCancelRequestCloid,
    cloid_to_wire
)
from .actions import (
    Action,
    BulkOrder,
    BulkCancel,
    BulkCancelCloid,
    AgentConnect,
    action_hash,
    encode_action
)
from .envelope import build_exchange_payload, serialize_payload

__all__ = [
    'float_to_wire',
    'AssetDirectory',
    'Limit',
    'Trigger',
    'OrderRequest',
    'ClientLimit',
    'ClientTrigger',
    'ClientOrderRequest',
    'CancelRequest',
    'CancelRequestCloid',
    'ClientCancelRequest',
    'ClientCancelRequestCloid',
    'cloid_to_wire',
    'Action',
    'BulkOrder',
    'BulkCancel',
    'BulkCancelCloid',
    'AgentConnect',
    'action_hash',
    'encode_action',
    'build_exchange_payload',
    'serialize_payload'
]
