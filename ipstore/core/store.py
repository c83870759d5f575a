"""
IP address stores built on the frequency counter
"""
from abc import ABC, abstractmethod
from ipaddress import IPv4Address, IPv6Address, ip_address
from typing import Any, Dict, List, Optional, Tuple, Union
import threading

from ipstore.config import settings
from ipstore.core.counter import FrequencyCounter

IPAddress = Union[IPv4Address, IPv6Address]


def normalize_ip(value: Union[str, int, bytes, IPAddress]) -> IPAddress:
    """
    Convert a value to an ipaddress object

    Args:
        value: Address as string, packed bytes, integer or ipaddress object

    Returns:
        IPv4Address or IPv6Address

    Raises:
        ValueError: If the value is not a valid address
    """
    if isinstance(value, (IPv4Address, IPv6Address)):
        return value
    if isinstance(value, str):
        value = value.strip()
    return ip_address(value)


class IPStore(ABC):
    """
    Interface for tracking the most active client addresses
    """

    @abstractmethod
    def request_handled(self, ip: Union[str, IPAddress]) -> None:
        """Record that a request from ip was handled"""

    @abstractmethod
    def top100(self) -> List[IPAddress]:
        """Get the most active addresses, highest request count first"""

    @abstractmethod
    def clear(self) -> None:
        """Forget every recorded request"""


class PulleyIPStore(IPStore):
    """
    Thread-safe IPStore backed by a FrequencyCounter

    Every call holds one lock, so readers never see a half-applied event
    or a half-cleared store.
    """

    def __init__(self, k: Optional[int] = None):
        """
        Initialize the store

        Args:
            k: Number of addresses to rank (default: settings.TOP_K)
        """
        self.counter = FrequencyCounter(k if k is not None else settings.TOP_K)
        self._lock = threading.Lock()

    @property
    def k(self) -> int:
        return self.counter.k

    def request_handled(self, ip: Union[str, IPAddress]) -> None:
        address = normalize_ip(ip)
        with self._lock:
            self.counter.record_event(address)

    def top100(self) -> List[IPAddress]:
        with self._lock:
            return self.counter.top_k()

    def ranked(self) -> List[Tuple[IPAddress, int]]:
        """Get (address, count) pairs in rank order"""
        with self._lock:
            return self.counter.ranked()

    def count(self, ip: Union[str, IPAddress]) -> int:
        """Get the exact request count for an address"""
        address = normalize_ip(ip)
        with self._lock:
            return self.counter.count(address)

    def clear(self) -> None:
        with self._lock:
            self.counter.clear()

    def stats(self) -> Dict[str, Any]:
        """
        Get store statistics

        Returns:
            Dictionary with k, occupancy, distinct, total and threshold
        """
        with self._lock:
            return self._stats()

    def snapshot(self) -> Tuple[List[Tuple[IPAddress, int]], Dict[str, Any]]:
        """Get ranked pairs and statistics from the same instant"""
        with self._lock:
            return self.counter.ranked(), self._stats()

    def _stats(self) -> Dict[str, Any]:
        return {
            "k": self.counter.k,
            "occupancy": self.counter.occupancy,
            "distinct": len(self.counter),
            "total": self.counter.total,
            "threshold": self.counter.threshold,
        }
