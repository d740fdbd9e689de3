import json
import unittest
import uuid

from eth_utils import keccak

from hyperliquid_signer.errors import EncodingError, SigningError, UnknownAssetError
from hyperliquid_signer.exchange import (
    BulkCancelCloid,
    BulkOrder,
    CancelRequestCloid,
    ClientCancelRequest,
    ClientCancelRequestCloid,
    ClientLimit,
    ClientOrderRequest,
    ClientTrigger,
    ExchangeGateway,
    Limit,
    OrderRequest,
    action_hash
)
from hyperliquid_signer.exchange.exchange_gateway import (
    bulk_cancel,
    bulk_cancel_by_oid,
    bulk_order,
    connect_agent,
    sign_orders
)
from hyperliquid_signer.signature import (
    Agent,
    EthChain,
    Signature,
    load_wallet,
    recover_agent_signer,
    sign_l1_action
)
from hyperliquid_signer.utils import NonceSource

PRIVATE_KEY = "e908f86dbb4d55ac876378565aafeabc187f6690f046459397b17d9b9a19688e"
VAULT = "0x1719884eb866cb12b2287399b15f7db5e7d775ea"
AGENT_ADDRESS = "0x5e9ee1089755c3435139848e47e6635505d5a13a"
CLOIDS = ["0x1c0f0be5594940158311413cb05b34cc", "0x2d0f0be5594940158311413cb05b34cc"]
NONCE = 1700000000000


class TestBulkOrder(unittest.TestCase):
    """Test batch order signing"""
    
    def setUp(self):
        self.wallet = load_wallet(PRIVATE_KEY)
    
    def test_envelope(self):
        """Test orders, tifs and prices in the signed envelope"""
        text = bulk_order(self.wallet, True, 3, CLOIDS, [True, False], [True, False],
                          [1800.50, 1900.0], [0.5, 1.25], NONCE)
        payload = json.loads(text)
        
        self.assertNotIn('vaultAddress', payload)
        self.assertEqual(payload['nonce'], NONCE)
        self.assertEqual(payload['action']['type'], 'order')
        self.assertEqual(payload['action']['grouping'], 'na')
        
        first, second = payload['action']['orders']
        self.assertEqual(first, {'a': 3, 'b': True, 'p': '1800.5', 's': '0.5', 'r': False,
                                 't': {'limit': {'tif': 'Alo'}}, 'c': CLOIDS[0]})
        self.assertEqual(second['t'], {'limit': {'tif': 'Ioc'}})
        self.assertFalse(second['b'])
        self.assertEqual(second['s'], '1.25')
    
    def test_signature_matches_pipeline(self):
        """Test the envelope signature equals the step-by-step pipeline"""
        text = bulk_order(self.wallet, False, 3, CLOIDS[:1], [True], [True], [10.0], [1.0], NONCE, VAULT)
        payload = json.loads(text)
        
        action = BulkOrder(orders=[OrderRequest(asset=3, is_buy=True, limit_px="10", sz="1",
                                                order_type=Limit(tif="Alo"), cloid=CLOIDS[0])])
        expected = sign_l1_action(self.wallet, action_hash(action, NONCE, VAULT), False)
        
        self.assertEqual(payload['signature'], expected.to_wire())
        self.assertEqual(payload['vaultAddress'], VAULT)
    
    def test_length_mismatch(self):
        """Test parallel lists must line up"""
        with self.assertRaises(ValueError):
            bulk_order(self.wallet, True, 3, CLOIDS, [True], [True, False], [1.0, 2.0], [1.0, 2.0], NONCE)
    
    def test_mixed_order_types(self):
        """Test limit and trigger orders in one batch"""
        orders = [
            ClientOrderRequest(asset_id=0, is_buy=True, limit_px=100.0, sz=1.0, order_type=ClientLimit(tif="Gtc")),
            ClientOrderRequest(asset_id=1, is_buy=False, limit_px=90.0, sz=1.0, reduce_only=True,
                               order_type=ClientTrigger(trigger_px=95.0, is_market=True, tpsl="sl"))
        ]
        payload = sign_orders(self.wallet, orders, NONCE, True, grouping="normalTpsl")
        
        self.assertEqual(payload['action']['grouping'], 'normalTpsl')
        self.assertEqual(payload['action']['orders'][1]['t'],
                         {'trigger': {'triggerPx': '95', 'isMarket': True, 'tpsl': 'sl'}})
        self.assertNotIn('c', payload['action']['orders'][0])


class TestBulkCancel(unittest.TestCase):
    """Test batch cancel signing"""
    
    def setUp(self):
        self.wallet = load_wallet(PRIVATE_KEY)
    
    def test_cancel_by_cloid(self):
        """Test cancel-by-cloid envelope"""
        payload = json.loads(bulk_cancel(self.wallet, True, 7, CLOIDS, NONCE))
        self.assertEqual(payload['action'], {
            'type': 'cancelByCloid',
            'cancels': [{'asset': 7, 'cloid': CLOIDS[0]}, {'asset': 7, 'cloid': CLOIDS[1]}]
        })
        
        action = BulkCancelCloid(cancels=[CancelRequestCloid(asset=7, cloid=c) for c in CLOIDS])
        expected = sign_l1_action(self.wallet, action_hash(action, NONCE), True)
        self.assertEqual(payload['signature'], expected.to_wire())
    
    def test_cancel_by_oid(self):
        """Test cancel-by-oid envelope"""
        payload = json.loads(bulk_cancel_by_oid(self.wallet, True, 7, [11, 12], NONCE, VAULT))
        self.assertEqual(payload['action'], {
            'type': 'cancel',
            'cancels': [{'asset': 7, 'oid': 11}, {'asset': 7, 'oid': 12}]
        })
        self.assertEqual(payload['vaultAddress'], VAULT)
    
    def test_cancel_matches_order_cloid(self):
        """Test uuid and integer cloids render the same in orders and cancels"""
        for cloid in (uuid.UUID("1c0f0be5-5949-4015-8311-413cb05b34cc"), 0x1c0f0be5594940158311413cb05b34cc):
            order = json.loads(bulk_order(self.wallet, True, 0, [cloid], [True], [True], [100.0], [1.0], NONCE))
            cancel = json.loads(bulk_cancel(self.wallet, True, 0, [cloid], NONCE + 1))
            self.assertEqual(cancel['action']['cancels'][0]['cloid'], order['action']['orders'][0]['c'])
            self.assertEqual(cancel['action']['cancels'][0]['cloid'], CLOIDS[0])
    
    def test_mainnet_and_testnet_differ(self):
        """Test network selection changes the signature"""
        mainnet = json.loads(bulk_cancel(self.wallet, True, 7, CLOIDS, NONCE))
        testnet = json.loads(bulk_cancel(self.wallet, False, 7, CLOIDS, NONCE))
        self.assertEqual(mainnet['action'], testnet['action'])
        self.assertNotEqual(mainnet['signature'], testnet['signature'])


class TestConnectAgent(unittest.TestCase):
    """Test agent approval signing"""
    
    def setUp(self):
        self.wallet = load_wallet(PRIVATE_KEY)
    
    def test_mainnet_agent(self):
        """Test agent approval uses Arbitrum and keccak(address)"""
        payload = connect_agent(self.wallet, AGENT_ADDRESS, True, NONCE)
        connection_id = keccak(bytes.fromhex(AGENT_ADDRESS[2:]))
        
        self.assertEqual(payload['action'], {
            'type': 'connect',
            'chain': 'Arbitrum',
            'agent': {'source': 'https://hyperliquid.xyz', 'connectionId': '0x' + connection_id.hex()},
            'agentAddress': AGENT_ADDRESS
        })
        self.assertNotIn('vaultAddress', payload)
        
        signature = payload['signature']
        recovered = recover_agent_signer(
            Agent(source='https://hyperliquid.xyz', connection_id=connection_id),
            EthChain.ARBITRUM,
            Signature(r=int(signature['r'], 16), s=int(signature['s'], 16), v=signature['v'])
        )
        self.assertEqual(recovered, self.wallet.address)
    
    def test_testnet_agent(self):
        """Test agent approval on testnet names ArbitrumGoerli"""
        payload = connect_agent(self.wallet, AGENT_ADDRESS, False, NONCE)
        self.assertEqual(payload['action']['chain'], 'ArbitrumGoerli')


class TestExchangeGateway(unittest.TestCase):
    """Test the gateway coordinator"""
    
    def setUp(self):
        self.gateway = ExchangeGateway(
            PRIVATE_KEY,
            is_mainnet=False,
            assets={'BTC': 0, 'ETH': 1},
            nonce_source=NonceSource(clock=lambda: 1700000000.0)
        )
    
    def test_address(self):
        """Test the wallet address is exposed"""
        self.assertEqual(self.gateway.address, load_wallet(PRIVATE_KEY).address)
    
    def test_nonce_source_used(self):
        """Test missing nonces come from the nonce source"""
        order = self.gateway.limit_order('ETH', True, 2000.0, 1.0)
        first = self.gateway.place_orders([order])
        second = self.gateway.place_orders([order])
        self.assertEqual(first['nonce'], NONCE)
        self.assertEqual(second['nonce'], NONCE + 1)
    
    def test_explicit_nonce(self):
        """Test an explicit nonce is used verbatim"""
        order = self.gateway.limit_order(1, False, 2000.0, 1.0, post_only=True)
        payload = self.gateway.place_orders([order], nonce=42)
        self.assertEqual(payload['nonce'], 42)
        self.assertEqual(payload['action']['orders'][0]['t'], {'limit': {'tif': 'Alo'}})
    
    def test_symbol_cancels(self):
        """Test symbol-keyed cancels resolve through the directory"""
        payload = self.gateway.cancel_by_cloid([ClientCancelRequestCloid(asset='BTC', cloid=CLOIDS[0])], nonce=1)
        self.assertEqual(payload['action']['cancels'], [{'asset': 0, 'cloid': CLOIDS[0]}])
        
        payload = self.gateway.cancel([ClientCancelRequest(asset='ETH', oid=9)], nonce=2)
        self.assertEqual(payload['action']['cancels'], [{'asset': 1, 'oid': 9}])
    
    def test_unknown_symbol(self):
        """Test unknown symbols fail before signing"""
        with self.assertRaises(UnknownAssetError):
            self.gateway.limit_order('DOGE', True, 1.0, 1.0)
    
    def test_vault_gateway(self):
        """Test a vault gateway tags every envelope"""
        gateway = ExchangeGateway(PRIVATE_KEY, vault_address=VAULT)
        payload = gateway.place_orders([gateway.limit_order(0, True, 1.0, 1.0)], nonce=3)
        self.assertEqual(payload['vaultAddress'], VAULT)
    
    def test_bad_inputs_fail_at_construction(self):
        """Test malformed key and vault are rejected up front"""
        with self.assertRaises(SigningError):
            ExchangeGateway("0xdeadbeef")
        with self.assertRaises(EncodingError):
            ExchangeGateway(PRIVATE_KEY, vault_address="0x1234")
    
    def test_approve_agent(self):
        """Test agent approval through the gateway"""
        payload = self.gateway.approve_agent(AGENT_ADDRESS, nonce=5)
        self.assertEqual(payload['action']['chain'], 'ArbitrumGoerli')
        self.assertEqual(payload['nonce'], 5)
    
    def test_to_json(self):
        """Test JSON rendering"""
        payload = self.gateway.place_orders([self.gateway.limit_order(0, True, 1.0, 1.0)], nonce=3)
        self.assertEqual(json.loads(ExchangeGateway.to_json(payload)), payload)


if __name__ == '__main__':
    unittest.main()
