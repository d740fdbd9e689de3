"""
Signature Package - Typed-data signing for exchange actions
Builds EIP-712 digests over connection ids and produces recoverable
secp256k1 signatures.

File: __init__.py
Modified: 2025-07-18
"""

from .chains import EthChain, eip712_domain
from .typed_data import Agent, agent_digest, agent_typed_data
from .signer import (
    Signature,
    load_wallet,
    recover_agent_signer,
    sign_hash,
    sign_l1_action,
    sign_typed_data,
    sign_with_agent
)

__all__ = [
    'EthChain',
    'eip712_domain',
    'Agent',
    'agent_digest',
    'agent_typed_data',
    'Signature',
    'load_wallet',
    'recover_agent_signer',
    'sign_hash',
    'sign_l1_action',
    'sign_typed_data',
    'sign_with_agent'
]
