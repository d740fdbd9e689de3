"""
Order Types Module

Defines the order and cancel data structures that make up an action.

Client* types are what callers build: they carry float prices and sizes and
asset symbols. ``convert`` turns them into the wire types, which hold only
canonical strings and numeric asset ids. The ``to_wire`` dicts are built with
a fixed key order because the connection id is hashed over them.
"""

import uuid
from dataclasses import dataclass
from typing import Any, Dict, Optional, Union

from ....errors import EncodingError
from .asset_directory import AssetDirectory
from .numeric import float_to_wire

MAX_U32 = 2 ** 32 - 1
MAX_U64 = 2 ** 64 - 1


def check_uint(value: int, maximum: int, name: str) -> int:
    """Ensure a value fits the unsigned integer width the exchange expects"""
    if isinstance(value, bool) or not isinstance(value, int) or not 0 <= value <= maximum:
        raise EncodingError(f"{name} must be an unsigned integer <= {maximum}, got {value!r}")
    return value


def cloid_to_wire(cloid: Union[str, int, uuid.UUID]) -> str:
    """
    Render a client order id as sent to the exchange.
    
    UUIDs and integers become "0x" followed by 32 lowercase hex digits.
    Strings are opaque and passed through unchanged.
    """
    if isinstance(cloid, uuid.UUID):
        return '0x' + cloid.hex
    if isinstance(cloid, int) and not isinstance(cloid, bool):
        if not 0 <= cloid < 2 ** 128:
            raise EncodingError(f"Integer cloid must fit in 128 bits, got {cloid}")
        return f'0x{cloid:032x}'
    if isinstance(cloid, str):
        return cloid
    raise EncodingError(f"Unsupported cloid type: {type(cloid).__name__}")


@dataclass(frozen=True)
class Limit:
    """Resting limit order with a time-in-force ("Gtc", "Alo", "Ioc")"""
    tif: str
    
    def to_wire(self) -> Dict[str, Any]:
        return {'limit': {'tif': self.tif}}


@dataclass(frozen=True)
class Trigger:
    """Take-profit / stop-loss order that activates at ``trigger_px``"""
    trigger_px: str
    is_market: bool
    tpsl: str
    
    def to_wire(self) -> Dict[str, Any]:
        return {
            'trigger': {
                'triggerPx': self.trigger_px,
                'isMarket': self.is_market,
                'tpsl': self.tpsl
            }
        }


OrderType = Union[Limit, Trigger]


@dataclass(frozen=True)
class OrderRequest:
    """
    Canonical order entry.
    
    Attributes:
        asset: Numeric asset id
        is_buy: Buy side flag
        limit_px: Canonical limit price string
        sz: Canonical size string
        order_type: Limit or Trigger variant
        reduce_only: Reduce-only flag
        cloid: Optional client order id
    """
    asset: int
    is_buy: bool
    limit_px: str
    sz: str
    order_type: OrderType
    reduce_only: bool = False
    cloid: Optional[str] = None
    
    def to_wire(self) -> Dict[str, Any]:
        """Encode with the fixed key order a, b, p, s, r, t, c"""
        wire = {
            'a': check_uint(self.asset, MAX_U32, 'asset'),
            'b': self.is_buy,
            'p': self.limit_px,
            's': self.sz,
            'r': self.reduce_only,
            't': self.order_type.to_wire()
        }
        if self.cloid is not None:
            wire['c'] = self.cloid
        return wire


@dataclass(frozen=True)
class ClientLimit:
    tif: str


@dataclass(frozen=True)
class ClientTrigger:
    trigger_px: float
    is_market: bool
    tpsl: str


ClientOrder = Union[ClientLimit, ClientTrigger]


@dataclass(frozen=True)
class ClientOrderRequest:
    """
    Caller-facing order with float price and size.
    
    This is the only order type that holds floats; ``convert`` canonicalizes
    them and copies every other field verbatim.
    """
    asset_id: int
    is_buy: bool
    limit_px: float
    sz: float
    order_type: ClientOrder
    reduce_only: bool = False
    cloid: Optional[Union[str, int, uuid.UUID]] = None
    
    def convert(self) -> OrderRequest:
        """
        Convert to the canonical order entry.
        
        Raises:
            NumericCanonicalizationError: A price or size is not finite
        """
        if isinstance(self.order_type, ClientTrigger):
            order_type = Trigger(
                trigger_px=float_to_wire(self.order_type.trigger_px),
                is_market=self.order_type.is_market,
                tpsl=self.order_type.tpsl
            )
        elif isinstance(self.order_type, ClientLimit):
            order_type = Limit(tif=self.order_type.tif)
        else:
            raise EncodingError(f"Unsupported order type: {type(self.order_type).__name__}")
        
        return OrderRequest(
            asset=self.asset_id,
            is_buy=self.is_buy,
            limit_px=float_to_wire(self.limit_px),
            sz=float_to_wire(self.sz),
            order_type=order_type,
            reduce_only=self.reduce_only,
            cloid=None if self.cloid is None else cloid_to_wire(self.cloid)
        )


@dataclass(frozen=True)
class CancelRequestCloid:
    asset: int
    cloid: str
    
    def to_wire(self) -> Dict[str, Any]:
        return {
            'asset': check_uint(self.asset, MAX_U32, 'asset'),
            'cloid': self.cloid
        }


@dataclass(frozen=True)
class ClientCancelRequestCloid:
    """Cancel by client order id, keyed by asset symbol"""
    asset: str
    cloid: Union[str, int, uuid.UUID]
    
    def convert(self, assets: AssetDirectory) -> CancelRequestCloid:
        return CancelRequestCloid(asset=assets.resolve(self.asset), cloid=cloid_to_wire(self.cloid))


@dataclass(frozen=True)
class CancelRequest:
    asset: int
    oid: int
    
    def to_wire(self) -> Dict[str, Any]:
        return {
            'asset': check_uint(self.asset, MAX_U32, 'asset'),
            'oid': check_uint(self.oid, MAX_U64, 'oid')
        }


@dataclass(frozen=True)
class ClientCancelRequest:
    """Cancel by exchange-assigned order id, keyed by asset symbol"""
    asset: str
    oid: int
    
    def convert(self, assets: AssetDirectory) -> CancelRequest:
        return CancelRequest(asset=assets.resolve(self.asset), oid=self.oid)
