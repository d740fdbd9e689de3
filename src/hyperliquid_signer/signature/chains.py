"""Chain variants and the EIP-712 domain each one signs under"""

from enum import Enum
from typing import Any, Dict

DOMAIN_NAME = 'Exchange'
DOMAIN_VERSION = '1'
VERIFYING_CONTRACT = '0x0000000000000000000000000000000000000000'

# Sources expected by the exchange on the L1 path
MAINNET_SOURCE = 'a'
TESTNET_SOURCE = 'b'

AGENT_SOURCE = 'https://hyperliquid.xyz'


class EthChain(Enum):
    """Chain whose id goes into the signing domain"""
    LOCALHOST = 1337
    ARBITRUM = 42161
    ARBITRUM_GOERLI = 421613
    
    @property
    def chain_id(self) -> int:
        return self.value
    
    @property
    def wire_name(self) -> str:
        """Name used for the chain in action payloads"""
        return {
            EthChain.LOCALHOST: 'Localhost',
            EthChain.ARBITRUM: 'Arbitrum',
            EthChain.ARBITRUM_GOERLI: 'ArbitrumGoerli'
        }[self]
    
    @classmethod
    def for_network(cls, is_mainnet: bool) -> 'EthChain':
        """Public chain used for agent approval on mainnet or testnet"""
        return cls.ARBITRUM if is_mainnet else cls.ARBITRUM_GOERLI


def l1_source(is_mainnet: bool) -> str:
    return MAINNET_SOURCE if is_mainnet else TESTNET_SOURCE


def eip712_domain(chain: EthChain) -> Dict[str, Any]:
    """Domain data for the given chain"""
    return {
        'name': DOMAIN_NAME,
        'version': DOMAIN_VERSION,
        'chainId': chain.chain_id,
        'verifyingContract': VERIFYING_CONTRACT
    }
