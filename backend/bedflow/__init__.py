"""
Hospital bed allocation and patient prioritization service.
"""
__version__ = "1.0.0"
