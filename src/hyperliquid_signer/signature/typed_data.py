"""
Typed-Data Digest Builder

Wraps a connection id in the ``Agent`` struct and hashes it under the
chain's EIP-712 domain:

    digest = keccak256(0x19 0x01 || domainSeparator || hashStruct(Agent))
"""

from dataclasses import dataclass
from typing import Any, Dict

from eth_account.messages import SignableMessage, encode_typed_data
from eth_utils import keccak

from ..errors import DigestConstructionError
from .chains import EthChain, eip712_domain

EIP712_TYPES = {
    'EIP712Domain': [
        {'name': 'name', 'type': 'string'},
        {'name': 'version', 'type': 'string'},
        {'name': 'chainId', 'type': 'uint256'},
        {'name': 'verifyingContract', 'type': 'address'}
    ],
    'Agent': [
        {'name': 'source', 'type': 'string'},
        {'name': 'connectionId', 'type': 'bytes32'}
    ]
}


@dataclass(frozen=True)
class Agent:
    """Typed-data message binding a connection id to a source tag"""
    source: str
    connection_id: bytes
    
    def __post_init__(self):
        if not isinstance(self.connection_id, (bytes, bytearray)) or len(self.connection_id) != 32:
            raise DigestConstructionError("Agent connection id must be exactly 32 bytes")
        object.__setattr__(self, 'connection_id', bytes(self.connection_id))
    
    def to_message(self) -> Dict[str, Any]:
        return {'source': self.source, 'connectionId': self.connection_id}
    
    def to_wire(self) -> Dict[str, Any]:
        return {'source': self.source, 'connectionId': '0x' + self.connection_id.hex()}


def agent_typed_data(agent: Agent, chain: EthChain) -> Dict[str, Any]:
    """Full EIP-712 message for an agent on the given chain"""
    return {
        'types': EIP712_TYPES,
        'primaryType': 'Agent',
        'domain': eip712_domain(chain),
        'message': agent.to_message()
    }


def encode_agent(agent: Agent, chain: EthChain) -> SignableMessage:
    """
    Encode an agent as a signable EIP-712 message.
    
    Raises:
        DigestConstructionError: Domain or message fails typed-data encoding
    """
    try:
        return encode_typed_data(full_message=agent_typed_data(agent, chain))
    except Exception as e:
        raise DigestConstructionError(f"Typed-data encoding failed for {chain.name}: {e}") from e


def typed_data_digest(signable: SignableMessage) -> bytes:
    """32-byte digest that gets signed"""
    return keccak(b'\x19' + signable.version + signable.header + signable.body)


def agent_digest(agent: Agent, chain: EthChain) -> bytes:
    return typed_data_digest(encode_agent(agent, chain))
