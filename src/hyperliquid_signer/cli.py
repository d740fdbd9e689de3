"""
Command line signer.

Reads the key and network from the environment or a config file, signs one
action and prints the JSON envelope. Nothing is sent to the exchange.
"""

import argparse
import sys
from typing import List, Optional, Union

from .errors import HyperliquidSignerError
from .exchange.exchange_gateway import ExchangeGateway
from .exchange.exchange_gateway.modules.order_types import (
    ClientCancelRequest,
    ClientCancelRequestCloid,
    ClientLimit,
    ClientOrderRequest,
    ClientTrigger
)
from .utils.config import Config
from .utils.logger import setup_logger

logger = setup_logger(__name__)


def _asset(value: str) -> Union[str, int]:
    return int(value) if value.isdigit() else value


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description='Sign a Hyperliquid exchange action')
    parser.add_argument('--config', default='configs/config.yaml', help='YAML config path')
    parser.add_argument('--testnet', action='store_true', help='Sign for testnet')
    parser.add_argument('--nonce', type=int, help='Nonce (defaults to the current time in ms)')
    parser.add_argument('--vault', help='Vault address to act for')
    
    sub = parser.add_subparsers(dest='command', required=True)
    
    order = sub.add_parser('order', help='Sign a single order')
    order.add_argument('--asset', required=True, type=_asset, help='Asset symbol or id')
    order.add_argument('--side', required=True, choices=['buy', 'sell'])
    order.add_argument('--price', required=True, type=float)
    order.add_argument('--size', required=True, type=float)
    order.add_argument('--tif', default='Gtc', help='Time in force for limit orders')
    order.add_argument('--reduce-only', action='store_true')
    order.add_argument('--cloid', help='Client order id')
    order.add_argument('--trigger-px', type=float, help='Trigger price; makes this a trigger order')
    order.add_argument('--tpsl', choices=['tp', 'sl'], default='sl')
    order.add_argument('--market', action='store_true', help='Trigger executes as market')
    
    cancel = sub.add_parser('cancel', help='Sign a cancel')
    cancel.add_argument('--asset', required=True, type=_asset, help='Asset symbol or id')
    target = cancel.add_mutually_exclusive_group(required=True)
    target.add_argument('--cloid', action='append', help='Client order id (repeatable)')
    target.add_argument('--oid', type=int, action='append', help='Exchange order id (repeatable)')
    
    return parser


def _gateway(args, config: Config) -> ExchangeGateway:
    if args.testnet:
        config.set('exchange.network', 'testnet')
    if args.vault:
        config.set('exchange.vault_address', args.vault)
    return ExchangeGateway.from_config(config)


def _order(args, gateway: ExchangeGateway) -> dict:
    if args.trigger_px is not None:
        order_type = ClientTrigger(trigger_px=args.trigger_px, is_market=args.market, tpsl=args.tpsl)
    else:
        order_type = ClientLimit(tif=args.tif)
    
    order = ClientOrderRequest(
        asset_id=gateway.asset_id(args.asset),
        is_buy=args.side == 'buy',
        limit_px=args.price,
        sz=args.size,
        order_type=order_type,
        reduce_only=args.reduce_only,
        cloid=args.cloid
    )
    return gateway.place_orders([order], nonce=args.nonce)


def _cancel(args, gateway: ExchangeGateway) -> dict:
    # Symbol-keyed requests go through the directory; bare ids are registered on the fly
    symbol = str(args.asset)
    if isinstance(args.asset, int) and symbol not in gateway.assets:
        gateway.assets.add(symbol, args.asset)
    
    if args.cloid:
        cancels = [ClientCancelRequestCloid(asset=symbol, cloid=c) for c in args.cloid]
        return gateway.cancel_by_cloid(cancels, nonce=args.nonce)
    
    cancels = [ClientCancelRequest(asset=symbol, oid=oid) for oid in args.oid]
    return gateway.cancel(cancels, nonce=args.nonce)


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    config = Config(args.config)
    
    if not config.validate():
        return 2
    
    try:
        gateway = _gateway(args, config)
        payload = _order(args, gateway) if args.command == 'order' else _cancel(args, gateway)
        print(gateway.to_json(payload))
    except HyperliquidSignerError as e:
        logger.error(f"Signing failed: {e}")
        return 1
    
    return 0


if __name__ == '__main__':
    sys.exit(main())
