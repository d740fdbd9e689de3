import io
import json
import os
import tempfile
import unittest
from contextlib import redirect_stdout
from pathlib import Path
from unittest import mock

from hyperliquid_signer.cli import main

PRIVATE_KEY = "e908f86dbb4d55ac876378565aafeabc187f6690f046459397b17d9b9a19688e"
CLOID = "0x1c0f0be5594940158311413cb05b34cc"


class TestCli(unittest.TestCase):
    """Test the command line signer"""
    
    def setUp(self):
        self.tmp = tempfile.TemporaryDirectory()
        self.config_path = str(Path(self.tmp.name) / 'missing.yaml')
    
    def tearDown(self):
        self.tmp.cleanup()
    
    def run_cli(self, *argv, env=None):
        out = io.StringIO()
        env = {'HYPERLIQUID_PRIVATE_KEY': PRIVATE_KEY} if env is None else env
        with mock.patch.dict(os.environ, env, clear=True), \
                mock.patch('hyperliquid_signer.utils.config.load_dotenv'), \
                redirect_stdout(out):
            code = main(['--config', self.config_path] + list(argv))
        return code, out.getvalue()
    
    def test_order(self):
        """Test signing a limit order"""
        code, out = self.run_cli('--nonce', '10', 'order', '--asset', '0', '--side', 'buy',
                                 '--price', '30000', '--size', '0.01', '--cloid', CLOID)
        self.assertEqual(code, 0)
        payload = json.loads(out)
        self.assertEqual(payload['nonce'], 10)
        self.assertEqual(payload['action']['orders'][0],
                         {'a': 0, 'b': True, 'p': '30000', 's': '0.01', 'r': False,
                          't': {'limit': {'tif': 'Gtc'}}, 'c': CLOID})
    
    def test_trigger_order(self):
        """Test signing a trigger order on testnet"""
        code, out = self.run_cli('--testnet', '--nonce', '11', 'order', '--asset', '1', '--side', 'sell',
                                 '--price', '1900', '--size', '2', '--trigger-px', '1950.5',
                                 '--tpsl', 'tp', '--reduce-only')
        self.assertEqual(code, 0)
        order = json.loads(out)['action']['orders'][0]
        self.assertEqual(order['t'], {'trigger': {'triggerPx': '1950.5', 'isMarket': False, 'tpsl': 'tp'}})
        self.assertTrue(order['r'])
    
    def test_cancel(self):
        """Test signing cancels by cloid and by oid"""
        code, out = self.run_cli('--nonce', '12', 'cancel', '--asset', '3', '--cloid', CLOID)
        self.assertEqual(code, 0)
        self.assertEqual(json.loads(out)['action'],
                         {'type': 'cancelByCloid', 'cancels': [{'asset': 3, 'cloid': CLOID}]})
        
        code, out = self.run_cli('--nonce', '13', 'cancel', '--asset', '3', '--oid', '5', '--oid', '6')
        self.assertEqual(code, 0)
        self.assertEqual(json.loads(out)['action']['cancels'], [{'asset': 3, 'oid': 5}, {'asset': 3, 'oid': 6}])
    
    def test_missing_key(self):
        """Test a missing key is a configuration error"""
        code, out = self.run_cli('cancel', '--asset', '3', '--oid', '5', env={})
        self.assertEqual(code, 2)
        self.assertEqual(out, '')
    
    def test_unknown_symbol(self):
        """Test unknown symbols exit non-zero without output"""
        code, out = self.run_cli('order', '--asset', 'DOGE', '--side', 'buy', '--price', '1', '--size', '1')
        self.assertEqual(code, 1)
        self.assertEqual(out, '')


if __name__ == '__main__':
    unittest.main()
