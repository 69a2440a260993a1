"""
holds submodules related to comparing optical mapping and sequencing based structural variant calls
"""

__version__ = '1.0.0'
