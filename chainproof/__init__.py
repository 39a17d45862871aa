"""
chainproof - normalize, parse and flatten Chainpoint anchor proofs.
"""

__version__ = "0.1.0"
