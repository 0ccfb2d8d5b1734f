"""
BANKSapi client - credential encryption for the BANKSapi banking aggregation API.

This package encrypts user banking credentials with the BANKSapi public key
before they are handed to an HTTP transport, so plaintext credentials never
leave the calling process.
"""

__version__ = "0.1.0"
