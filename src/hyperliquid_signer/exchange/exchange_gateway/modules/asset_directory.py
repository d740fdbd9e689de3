"""In-memory symbol to asset id directory"""

from typing import Dict, Iterator, Mapping, Optional

from ....errors import UnknownAssetError


class AssetDirectory(Mapping):
    """Maps human-readable symbols to the numeric asset ids used on the wire"""
    
    def __init__(self, assets: Optional[Mapping[str, int]] = None):
        self._assets: Dict[str, int] = {}
        for symbol, asset_id in (assets or {}).items():
            self.add(symbol, asset_id)
    
    def add(self, symbol: str, asset_id: int) -> None:
        if isinstance(asset_id, bool) or not isinstance(asset_id, int) or not 0 <= asset_id < 2 ** 32:
            raise ValueError(f"Asset id for {symbol} must be an unsigned 32-bit integer, got {asset_id!r}")
        self._assets[symbol] = asset_id
    
    def resolve(self, symbol: str) -> int:
        try:
            return self._assets[symbol]
        except KeyError:
            raise UnknownAssetError(symbol) from None
    
    def __getitem__(self, symbol: str) -> int:
        return self.resolve(symbol)
    
    def __iter__(self) -> Iterator[str]:
        return iter(self._assets)
    
    def __len__(self) -> int:
        return len(self._assets)
