# site_parity/__init__.py
"""
SiteParity: page link inventories, content extraction and migration checks.

The command line lives in :mod:`site_parity.cli` (console script ``site-parity``).
"""
__version__ = "0.1.0"

__all__ = ["__version__"]
