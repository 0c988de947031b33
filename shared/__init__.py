"""Shared infrastructure for the Decryption game.

- utils: Common utilities (JSON logging)
"""

__version__ = "0.1.0"
