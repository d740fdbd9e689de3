"""
Actions Module

Action payloads and the connection id hash.

The connection id is keccak256 over:
    msgpack(action) || nonce (8 bytes, big-endian) || vault tag
where the vault tag is 0x01 followed by the 20 address bytes, or a single
0x00 when the action is not taken on behalf of a vault.
"""

from dataclasses import dataclass
from typing import Any, ClassVar, Dict, Optional, Tuple, Union

import msgpack
from eth_utils import decode_hex, is_hex_address, keccak

from ....errors import EncodingError
from ....signature.typed_data import Agent
from ....utils.logger import setup_logger
from .order_types import (
    MAX_U64,
    CancelRequest,
    CancelRequestCloid,
    OrderRequest,
    check_uint
)

logger = setup_logger(__name__)

Address = Union[str, bytes]


def address_to_bytes(address: Address) -> bytes:
    """Parse a 20-byte address given as 0x-prefixed hex or raw bytes"""
    if isinstance(address, (bytes, bytearray)):
        if len(address) != 20:
            raise EncodingError(f"Address must be 20 bytes, got {len(address)}")
        return bytes(address)
    if isinstance(address, str) and address.startswith(('0x', '0X')) and is_hex_address(address):
        return decode_hex(address)
    raise EncodingError(f"Malformed address: {address!r}")


def address_to_wire(address: Address) -> str:
    """Lowercase 0x-prefixed hex, the form the exchange echoes back"""
    return '0x' + address_to_bytes(address).hex()


class Action:
    """Base class for actions; subclasses set ``action_type`` and ``payload``"""
    
    action_type: ClassVar[str]
    
    def payload(self) -> Dict[str, Any]:
        raise NotImplementedError
    
    def to_wire(self) -> Dict[str, Any]:
        """The tagged action as a plain dict, ``type`` first"""
        wire = {'type': self.action_type}
        wire.update(self.payload())
        return wire


@dataclass(frozen=True)
class BulkOrder(Action):
    orders: Tuple[OrderRequest, ...]
    grouping: str = 'na'
    
    action_type: ClassVar[str] = 'order'
    
    def __post_init__(self):
        object.__setattr__(self, 'orders', tuple(self.orders))
    
    def payload(self) -> Dict[str, Any]:
        return {
            'orders': [order.to_wire() for order in self.orders],
            'grouping': self.grouping
        }


@dataclass(frozen=True)
class BulkCancelCloid(Action):
    cancels: Tuple[CancelRequestCloid, ...]
    
    action_type: ClassVar[str] = 'cancelByCloid'
    
    def __post_init__(self):
        object.__setattr__(self, 'cancels', tuple(self.cancels))
    
    def payload(self) -> Dict[str, Any]:
        return {'cancels': [cancel.to_wire() for cancel in self.cancels]}


@dataclass(frozen=True)
class BulkCancel(Action):
    cancels: Tuple[CancelRequest, ...]
    
    action_type: ClassVar[str] = 'cancel'
    
    def __post_init__(self):
        object.__setattr__(self, 'cancels', tuple(self.cancels))
    
    def payload(self) -> Dict[str, Any]:
        return {'cancels': [cancel.to_wire() for cancel in self.cancels]}


@dataclass(frozen=True)
class AgentConnect(Action):
    """Approval of an agent key to trade on behalf of the signing wallet"""
    chain: str
    agent: Agent
    agent_address: Address
    
    action_type: ClassVar[str] = 'connect'
    
    def payload(self) -> Dict[str, Any]:
        return {
            'chain': self.chain,
            'agent': self.agent.to_wire(),
            'agentAddress': address_to_wire(self.agent_address)
        }


def encode_action(action: Action) -> bytes:
    """
    Serialize an action to its canonical msgpack bytes.
    
    Raises:
        EncodingError: The action contains a value msgpack cannot encode
    """
    try:
        return msgpack.packb(action.to_wire(), use_bin_type=True)
    except (TypeError, ValueError, OverflowError) as e:
        raise EncodingError(f"Cannot encode {action.action_type} action: {e}") from e


def connection_preimage(action: Action, nonce: int,
                        vault_address: Optional[Address] = None) -> bytes:
    """Bytes hashed into the connection id"""
    data = encode_action(action)
    data += check_uint(nonce, MAX_U64, 'nonce').to_bytes(8, 'big')
    if vault_address is None:
        data += b'\x00'
    else:
        data += b'\x01' + address_to_bytes(vault_address)
    return data


def action_hash(action: Action, nonce: int,
                vault_address: Optional[Address] = None) -> bytes:
    """
    Compute the 32-byte connection id for an action.
    
    Args:
        action: Action to bind
        nonce: Caller-supplied nonce, usually a millisecond timestamp
        vault_address: Sub-account the action is taken for, if any
        
    Returns:
        keccak256 digest of the connection preimage
    """
    connection_id = keccak(connection_preimage(action, nonce, vault_address))
    logger.debug(f"Connection id for {action.action_type} nonce={nonce}: 0x{connection_id.hex()}")
    return connection_id
