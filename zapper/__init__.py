"""Zapper - single-sided liquidity provision for constant-product pools."""

from zapper.zap import Zapper, get_default_zapper

__version__ = "0.1.0"
__all__ = ["Zapper", "get_default_zapper", "__version__"]
