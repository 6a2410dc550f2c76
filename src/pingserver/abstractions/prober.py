from abc import ABC, abstractmethod
from typing import Optional


class Prober(ABC):
    """
    Abstract base class for reachability probes. Implementations measure the
    round-trip time to a host.
    """

    @abstractmethod
    def probe(self, host: str, timeout: float) -> Optional[float]:
        """
        Send one echo request to a host and measure the round-trip time.

        Args:
            host (str): Hostname or address, already validated by the caller.
            timeout (float): Seconds to wait for a reply.

        Returns:
            Optional[float]: Latency in milliseconds, or None if the probe failed.
        """
