"""
Marmoraria Control - slab and supply inventory for stone fabrication shops
"""
__version__ = "1.0.0"
