"""
Envelope Module

Assembles the signed request body posted to the exchange endpoint.
"""

import json
from typing import Any, Dict, Optional

from ....errors import SerializationError
from ....signature.signer import Signature
from .actions import Action, Address, address_to_wire
from .order_types import MAX_U64, check_uint


def build_exchange_payload(action: Action, signature: Signature, nonce: int,
                           vault_address: Optional[Address] = None) -> Dict[str, Any]:
    """
    Build the request body for a signed action.
    
    ``vaultAddress`` is only present when a vault address is given; the
    exchange schema treats a null value differently from a missing key.
    """
    payload = {
        'action': action.to_wire(),
        'signature': signature.to_wire(),
        'nonce': check_uint(nonce, MAX_U64, 'nonce')
    }
    if vault_address is not None:
        payload['vaultAddress'] = address_to_wire(vault_address)
    return payload


def serialize_payload(payload: Dict[str, Any]) -> str:
    """Render a payload as compact JSON"""
    try:
        return json.dumps(payload, separators=(',', ':'), allow_nan=False)
    except (TypeError, ValueError) as e:
        raise SerializationError(f"Cannot serialize exchange payload: {e}") from e
