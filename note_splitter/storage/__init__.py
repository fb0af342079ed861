"""
Vault Storage Module

Backends the split pipeline writes notes through.
"""

from .base import VaultStorage, WriteOutcome, WriteStatus
from .local import LocalVaultStorage

__all__ = [
    'VaultStorage',
    'WriteOutcome',
    'WriteStatus',
    'LocalVaultStorage',
]
