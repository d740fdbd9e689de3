"""
Exchange Gateway Package - Action signing interface
Builds canonical order and cancel actions, hashes them into connection ids
and wraps the signed result in the exchange request envelope.

File: __init__.py
Modified: 2025-07-18
"""

from .exchange_gateway import (
    ExchangeGateway,
    bulk_cancel,
    bulk_cancel_by_oid,
    bulk_order,
    connect_agent,
    sign_action,
    sign_orders
)

__all__ = [
    'ExchangeGateway',
    'bulk_cancel',
    'bulk_cancel_by_oid',
    'bulk_order',
    'connect_agent',
    'sign_action',
    'sign_orders'
]
