"""
Core frequency tracking
"""
from ipstore.core.counter import FrequencyCounter
from ipstore.core.store import IPStore, PulleyIPStore

__all__ = [
    'FrequencyCounter',
    'IPStore',
    'PulleyIPStore',
]
