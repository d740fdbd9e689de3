"""
Recoverable Signature Producer

Signs typed-data digests with a secp256k1 key. eth_account derives the
ECDSA nonce deterministically (RFC 6979) and returns low-s signatures, so a
given key and digest always produce the same signature.
"""

from dataclasses import dataclass
from typing import Any, Dict, Union

from eth_account import Account
from eth_account.signers.local import LocalAccount
from eth_utils import to_checksum_address, to_hex

from ..errors import SigningError
from ..utils.logger import setup_logger
from .chains import EthChain, l1_source
from .typed_data import Agent, agent_digest, encode_agent

logger = setup_logger(__name__)

Wallet = Union[LocalAccount, str]


def normalize_recovery_id(v: int) -> int:
    """Map a recovery id to the 27/28 convention the exchange requires"""
    if v in (0, 1):
        return v + 27
    if v in (27, 28):
        return v
    raise SigningError(f"Unexpected recovery id: {v}")


@dataclass(frozen=True)
class Signature:
    """ECDSA signature with an Ethereum-style ``v`` of 27 or 28"""
    r: int
    s: int
    v: int
    
    def to_bytes(self) -> bytes:
        """r and s as 32-byte big-endian integers, then v"""
        return self.r.to_bytes(32, 'big') + self.s.to_bytes(32, 'big') + bytes([self.v])
    
    def to_hex(self) -> str:
        return self.to_bytes().hex()
    
    def to_wire(self) -> Dict[str, Any]:
        return {'r': to_hex(self.r), 's': to_hex(self.s), 'v': self.v}
    
    def __str__(self):
        return self.to_hex()


def load_wallet(private_key: Wallet) -> LocalAccount:
    """
    Load a signing wallet from a hex private key.
    
    Malformed keys are rejected here, before anything is signed.
    
    Raises:
        SigningError: Key is not a valid secp256k1 private key
    """
    if isinstance(private_key, LocalAccount):
        return private_key
    if not isinstance(private_key, str):
        raise SigningError("Private key must be a hex string")
    try:
        return Account.from_key(private_key)
    except Exception as e:
        # Keep the key itself out of the message
        raise SigningError(f"Invalid private key: {type(e).__name__}") from None


def sign_hash(digest: bytes, wallet: Wallet) -> Signature:
    """Sign a raw 32-byte digest"""
    if len(digest) != 32:
        raise SigningError(f"Digest must be 32 bytes, got {len(digest)}")
    
    account = load_wallet(wallet)
    signed = account.unsafe_sign_hash(digest)
    
    return Signature(r=signed.r, s=signed.s, v=normalize_recovery_id(signed.v))


def sign_typed_data(agent: Agent, chain: EthChain, wallet: Wallet) -> Signature:
    """Sign an agent message under the chain's domain"""
    return sign_hash(agent_digest(agent, chain), wallet)


def sign_with_agent(wallet: Wallet, chain: EthChain, source: str,
                    connection_id: bytes) -> Signature:
    """
    Sign a connection id wrapped in an ``Agent`` for the given chain.
    
    Args:
        wallet: Signing wallet or hex private key
        chain: Chain whose id goes into the domain
        source: Source tag carried in the message
        connection_id: 32-byte connection id
    """
    agent = Agent(source=source, connection_id=connection_id)
    logger.debug(f"Signing connection id 0x{agent.connection_id.hex()} on {chain.name} (source={source})")
    return sign_typed_data(agent, chain, wallet)


def sign_l1_action(wallet: Wallet, connection_id: bytes, is_mainnet: bool) -> Signature:
    """Sign an exchange action's connection id on the local-chain path"""
    return sign_with_agent(wallet, EthChain.LOCALHOST, l1_source(is_mainnet), connection_id)


def recover_agent_signer(agent: Agent, chain: EthChain, signature: Signature) -> str:
    """Checksummed address of the wallet that produced ``signature``"""
    address = Account.recover_message(
        encode_agent(agent, chain),
        vrs=(signature.v, signature.r, signature.s)
    )
    return to_checksum_address(address)
