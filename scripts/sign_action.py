#!/usr/bin/env python3
"""
Sign action script for the Hyperliquid signer
Signs an order or cancel and prints the exchange request body

Usage:
    HYPERLIQUID_PRIVATE_KEY=... python scripts/sign_action.py order --asset 0 --side buy --price 30000 --size 0.1
    python scripts/sign_action.py --testnet cancel --asset BTC --cloid 0x1c0f0be5594940158311413cb05b34cc
"""

import sys

from dotenv import load_dotenv

from hyperliquid_signer.cli import main

# Load environment variables
load_dotenv()


if __name__ == '__main__':
    sys.exit(main())
