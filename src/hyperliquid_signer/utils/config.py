"""
Configuration Manager - YAML-based configuration management
Loads signer configuration from a YAML file and environment variables
with validation and default values.

File: config.py
Modified: 2025-07-15
"""

import copy
import os
import yaml
from dotenv import load_dotenv
from typing import Dict, Any, List
from pathlib import Path

from .logger import configure_logging, level_value, setup_logger, mask_secret

logger = setup_logger(__name__)

NETWORKS = ('mainnet', 'testnet')

DEFAULT_CONFIG: Dict[str, Any] = {
    'exchange': {
        'network': 'mainnet',
        'private_key': None,
        'vault_address': None
    },
    'signing': {
        'grouping': 'na',
        'maker_tif': 'Alo',
        'taker_tif': 'Ioc'
    },
    'assets': {},
    'logging': {
        'level': 'INFO',
        'log_dir': None
    }
}


class Config:
    """Configuration management"""
    
    def __init__(self, config_path: str = "configs/config.yaml", load_env_file: bool = True):
        self.config_path = Path(config_path)
        if load_env_file:
            load_dotenv()
        self.config = self._load_config()
        self._load_env_vars()
        self.apply_logging()
        
    def _load_config(self) -> Dict[str, Any]:
        """Load configuration from YAML file"""
        config = copy.deepcopy(DEFAULT_CONFIG)
        if self.config_path.exists():
            with open(self.config_path, 'r') as f:
                loaded = yaml.safe_load(f) or {}
            for section, values in loaded.items():
                if isinstance(values, dict) and isinstance(config.get(section), dict):
                    config[section].update(values)
                else:
                    config[section] = values
            logger.info(f"Loaded configuration from {self.config_path}")
        return config
    
    def _load_env_vars(self):
        """Load environment variables and override config"""
        # Exchange credentials
        if 'HYPERLIQUID_PRIVATE_KEY' in os.environ:
            self.config['exchange']['private_key'] = os.environ['HYPERLIQUID_PRIVATE_KEY']
            logger.info(f"Private key taken from environment ({mask_secret(os.environ['HYPERLIQUID_PRIVATE_KEY'])})")
        
        if 'HYPERLIQUID_NETWORK' in os.environ:
            self.config['exchange']['network'] = os.environ['HYPERLIQUID_NETWORK'].lower()
        
        if 'HYPERLIQUID_VAULT_ADDRESS' in os.environ:
            self.config['exchange']['vault_address'] = os.environ['HYPERLIQUID_VAULT_ADDRESS']
        
        if 'HYPERLIQUID_SIGNER_LOG_LEVEL' in os.environ:
            self.config['logging']['level'] = os.environ['HYPERLIQUID_SIGNER_LOG_LEVEL'].upper()
        
        if 'HYPERLIQUID_SIGNER_LOG_DIR' in os.environ:
            self.config['logging']['log_dir'] = os.environ['HYPERLIQUID_SIGNER_LOG_DIR']
    
    def apply_logging(self):
        """Apply the logging section to the package loggers"""
        configure_logging(
            level=self.get('logging.level'),
            log_dir=self.get('logging.log_dir')
        )
    
    @property
    def is_mainnet(self) -> bool:
        return self.get('exchange.network', 'mainnet') == 'mainnet'
    
    def get(self, key: str, default: Any = None) -> Any:
        """Get configuration value"""
        keys = key.split('.')
        value = self.config
        
        for k in keys:
            if isinstance(value, dict) and k in value:
                value = value[k]
            else:
                return default
        
        return default if value is None else value
    
    def set(self, key: str, value: Any):
        """Set configuration value"""
        keys = key.split('.')
        config = self.config
        
        for k in keys[:-1]:
            if k not in config:
                config[k] = {}
            config = config[k]
        
        config[keys[-1]] = value
    
    def save(self):
        """Save configuration to file, leaving the private key out"""
        self.config_path.parent.mkdir(parents=True, exist_ok=True)
        
        to_save = copy.deepcopy(self.config)
        to_save['exchange']['private_key'] = None
        
        with open(self.config_path, 'w') as f:
            yaml.dump(to_save, f, default_flow_style=False)
    
    def errors(self) -> List[str]:
        """List configuration problems"""
        problems = []
        
        if self.get('exchange.private_key') is None:
            problems.append("Missing required configuration: exchange.private_key")
        
        if self.get('exchange.network') not in NETWORKS:
            problems.append(f"exchange.network must be one of {NETWORKS}")
        
        if not isinstance(self.get('assets', {}), dict):
            problems.append("assets must map symbols to asset ids")
        
        if level_value(self.get('logging.level', 'INFO')) is None:
            problems.append("logging.level must be a logging level name")
        
        for key in ('signing.grouping', 'signing.maker_tif', 'signing.taker_tif'):
            if not isinstance(self.get(key), str):
                problems.append(f"{key} must be a string")
        
        return problems
    
    def validate(self) -> bool:
        """Validate configuration"""
        problems = self.errors()
        for problem in problems:
            logger.error(problem)
        return not problems
