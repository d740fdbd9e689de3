"""Exchange gateway - builds and signs exchange action envelopes"""

import uuid
from typing import Any, Dict, List, Mapping, Optional, Sequence, Union

from eth_utils import keccak

from .modules.actions import (
    Action,
    Address,
    AgentConnect,
    BulkCancel,
    BulkCancelCloid,
    BulkOrder,
    action_hash,
    address_to_bytes
)
from .modules.asset_directory import AssetDirectory
from .modules.envelope import build_exchange_payload, serialize_payload
from .modules.order_types import (
    CancelRequest,
    CancelRequestCloid,
    ClientCancelRequest,
    ClientCancelRequestCloid,
    ClientLimit,
    ClientOrderRequest,
    cloid_to_wire
)

from ...signature.chains import AGENT_SOURCE, EthChain
from ...signature.signer import Wallet, load_wallet, sign_l1_action, sign_with_agent
from ...signature.typed_data import Agent
from ...utils.logger import setup_logger
from ...utils.nonce import NonceSource

logger = setup_logger(__name__)

MAKER_TIF = 'Alo'
TAKER_TIF = 'Ioc'
Cloid = Union[str, int, uuid.UUID]


def sign_action(wallet: Wallet, action: Action, nonce: int, is_mainnet: bool,
                vault_address: Optional[Address] = None) -> Dict[str, Any]:
    """
    Hash, sign and wrap an action on the L1 path.
    
    Args:
        wallet: Signing wallet or hex private key
        action: Order, cancel or cancel-by-cloid action
        nonce: Caller-supplied nonce
        is_mainnet: Selects the mainnet or testnet source tag
        vault_address: Sub-account the action is taken for, if any
        
    Returns:
        Exchange payload dict
    """
    connection_id = action_hash(action, nonce, vault_address)
    signature = sign_l1_action(wallet, connection_id, is_mainnet)
    logger.debug(f"Signed {action.action_type} action nonce={nonce} v={signature.v}")
    return build_exchange_payload(action, signature, nonce, vault_address)


def sign_orders(wallet: Wallet, orders: Sequence[ClientOrderRequest], nonce: int,
                is_mainnet: bool, vault_address: Optional[Address] = None,
                grouping: str = 'na') -> Dict[str, Any]:
    """Canonicalize and sign a batch of client orders"""
    action = BulkOrder(orders=[order.convert() for order in orders], grouping=grouping)
    return sign_action(wallet, action, nonce, is_mainnet, vault_address)


def _zip_equal(**columns: Sequence) -> List[tuple]:
    lengths = {name: len(values) for name, values in columns.items()}
    if len(set(lengths.values())) > 1:
        raise ValueError(f"Order fields must have equal lengths, got {lengths}")
    return list(zip(*columns.values()))


def bulk_order(wallet: Wallet, is_mainnet: bool, asset_id: int, cloids: Sequence[Cloid],
               is_maker: Sequence[bool], is_buy: Sequence[bool], limit_px: Sequence[float],
               sz: Sequence[float], nonce: int, vault_address: Optional[Address] = None,
               maker_tif: str = MAKER_TIF, taker_tif: str = TAKER_TIF) -> str:
    """
    Sign a batch of limit orders on one asset and return the JSON envelope.
    
    Entry ``i`` of every list describes order ``i``. Maker orders are sent as
    add-liquidity-only, taker orders as immediate-or-cancel.
    """
    rows = _zip_equal(cloids=cloids, is_maker=is_maker, is_buy=is_buy, limit_px=limit_px, sz=sz)
    orders = [
        ClientOrderRequest(
            asset_id=asset_id,
            is_buy=buy,
            limit_px=px,
            sz=size,
            order_type=ClientLimit(tif=maker_tif if maker else taker_tif),
            reduce_only=False,
            cloid=cloid
        )
        for cloid, maker, buy, px, size in rows
    ]
    return serialize_payload(sign_orders(wallet, orders, nonce, is_mainnet, vault_address))


def bulk_cancel(wallet: Wallet, is_mainnet: bool, asset_id: int, cloids: Sequence[Cloid],
                nonce: int, vault_address: Optional[Address] = None) -> str:
    """Sign a cancel-by-cloid batch on one asset and return the JSON envelope"""
    action = BulkCancelCloid(
        cancels=[CancelRequestCloid(asset=asset_id, cloid=cloid_to_wire(cloid)) for cloid in cloids]
    )
    return serialize_payload(sign_action(wallet, action, nonce, is_mainnet, vault_address))


def bulk_cancel_by_oid(wallet: Wallet, is_mainnet: bool, asset_id: int, oids: Sequence[int],
                       nonce: int, vault_address: Optional[Address] = None) -> str:
    """Sign a cancel batch keyed by exchange order ids and return the JSON envelope"""
    action = BulkCancel(cancels=[CancelRequest(asset=asset_id, oid=oid) for oid in oids])
    return serialize_payload(sign_action(wallet, action, nonce, is_mainnet, vault_address))


def connect_agent(wallet: Wallet, agent_address: Address, is_mainnet: bool,
                  nonce: int) -> Dict[str, Any]:
    """
    Approve ``agent_address`` to sign actions for ``wallet``.
    
    The agent's connection id is the keccak hash of its address, signed on
    the public chain for the network rather than the local-chain path.
    """
    chain = EthChain.for_network(is_mainnet)
    connection_id = keccak(address_to_bytes(agent_address))
    agent = Agent(source=AGENT_SOURCE, connection_id=connection_id)
    action = AgentConnect(chain=chain.wire_name, agent=agent, agent_address=agent_address)
    
    signature = sign_with_agent(wallet, chain, AGENT_SOURCE, connection_id)
    logger.info(f"Signed agent approval for {chain.wire_name}")
    return build_exchange_payload(action, signature, nonce)


class ExchangeGateway:
    """Signs exchange actions for one wallet - Main coordinator"""
    
    def __init__(self, private_key: Wallet, is_mainnet: bool = True,
                 vault_address: Optional[Address] = None, grouping: str = 'na',
                 maker_tif: str = MAKER_TIF, taker_tif: str = TAKER_TIF,
                 assets: Optional[Mapping[str, int]] = None,
                 nonce_source: Optional[NonceSource] = None):
        self.wallet = load_wallet(private_key)
        self.is_mainnet = is_mainnet
        # Parsed up front so a bad address fails at construction
        self.vault_address = None if vault_address is None else address_to_bytes(vault_address)
        self.grouping = grouping
        self.maker_tif = maker_tif
        self.taker_tif = taker_tif
        self.assets = assets if isinstance(assets, AssetDirectory) else AssetDirectory(assets)
        self.nonce_source = nonce_source or NonceSource()
        
        logger.info(f"ExchangeGateway initialized for {'mainnet' if is_mainnet else 'testnet'}"
                    f"{' (vault)' if self.vault_address else ''}")
    
    @classmethod
    def from_config(cls, config) -> 'ExchangeGateway':
        """Build a gateway from a ``Config``"""
        return cls(
            private_key=config.get('exchange.private_key'),
            is_mainnet=config.is_mainnet,
            vault_address=config.get('exchange.vault_address'),
            grouping=config.get('signing.grouping', 'na'),
            maker_tif=config.get('signing.maker_tif', MAKER_TIF),
            taker_tif=config.get('signing.taker_tif', TAKER_TIF),
            assets=config.get('assets', {})
        )
    
    @property
    def address(self) -> str:
        return self.wallet.address
    
    def _nonce(self, nonce: Optional[int]) -> int:
        return self.nonce_source.next_nonce() if nonce is None else nonce
    
    def asset_id(self, asset: Union[str, int]) -> int:
        """Resolve a symbol through the asset directory; ids pass through"""
        return self.assets.resolve(asset) if isinstance(asset, str) else asset
    
    def place_orders(self, orders: Sequence[ClientOrderRequest],
                     nonce: Optional[int] = None) -> Dict[str, Any]:
        """Sign a batch of orders"""
        payload = sign_orders(self.wallet, orders, self._nonce(nonce), self.is_mainnet,
                              self.vault_address, self.grouping)
        logger.info(f"Signed order batch of {len(orders)} (nonce={payload['nonce']})")
        return payload
    
    def limit_order(self, asset: Union[str, int], is_buy: bool, price: float, size: float,
                    post_only: bool = False, reduce_only: bool = False,
                    cloid: Optional[str] = None) -> ClientOrderRequest:
        """Build a client limit order using the gateway's maker/taker tifs"""
        return ClientOrderRequest(
            asset_id=self.asset_id(asset),
            is_buy=is_buy,
            limit_px=price,
            sz=size,
            order_type=ClientLimit(tif=self.maker_tif if post_only else self.taker_tif),
            reduce_only=reduce_only,
            cloid=cloid
        )
    
    def cancel_by_cloid(self, cancels: Sequence[ClientCancelRequestCloid],
                        nonce: Optional[int] = None) -> Dict[str, Any]:
        """Sign a cancel-by-cloid batch for symbol-keyed cancels"""
        action = BulkCancelCloid(cancels=[cancel.convert(self.assets) for cancel in cancels])
        return sign_action(self.wallet, action, self._nonce(nonce), self.is_mainnet, self.vault_address)
    
    def cancel(self, cancels: Sequence[ClientCancelRequest],
               nonce: Optional[int] = None) -> Dict[str, Any]:
        """Sign a cancel batch keyed by exchange order ids"""
        action = BulkCancel(cancels=[cancel.convert(self.assets) for cancel in cancels])
        return sign_action(self.wallet, action, self._nonce(nonce), self.is_mainnet, self.vault_address)
    
    def approve_agent(self, agent_address: Address, nonce: Optional[int] = None) -> Dict[str, Any]:
        """Sign an agent approval for this wallet"""
        return connect_agent(self.wallet, agent_address, self.is_mainnet, self._nonce(nonce))
    
    @staticmethod
    def to_json(payload: Dict[str, Any]) -> str:
        return serialize_payload(payload)
