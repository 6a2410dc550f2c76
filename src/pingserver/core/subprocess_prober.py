import logging
import re
import subprocess
from typing import Optional

from pingserver.abstractions.prober import Prober

logger = logging.getLogger(__name__)

LATENCY_PATTERN = re.compile(r"time=([0-9]+\.?[0-9]*)\s*ms")
# Extra wall-clock allowance on top of ping's own deadline
SUBPROCESS_GRACE_SECONDS = 2


def parse_latency(output: str) -> Optional[float]:
    """
    Extract the first ``time=<n> ms`` value from ping output.

    Returns:
        Optional[float]: Latency in milliseconds, or None if no marker is found.
    """
    match = LATENCY_PATTERN.search(output)
    if match is None:
        return None
    return float(match.group(1))


class SubprocessProber(Prober):
    """
    Prober that shells out to the system ping utility and parses its output.
    """

    def __init__(self, ping_binary: str = "ping", count: int = 1):
        self.ping_binary = ping_binary
        self.count = count

    def build_command(self, host: str, timeout: float) -> list[str]:
        return [
            self.ping_binary,
            "-c",
            str(self.count),
            "-W",
            str(max(1, int(timeout))),
            "--",
            host,
        ]

    def probe(self, host: str, timeout: float) -> Optional[float]:
        cmd = self.build_command(host, timeout)
        try:
            result = subprocess.run(
                cmd,
                stdout=subprocess.PIPE,
                stderr=subprocess.DEVNULL,
                text=True,
                timeout=timeout * self.count + SUBPROCESS_GRACE_SECONDS,
                check=False,
            )
        except subprocess.TimeoutExpired:
            logger.warning(f"Ping to {host} exceeded {timeout}s deadline")
            return None
        except OSError as e:
            logger.error(f"Could not run {self.ping_binary}: {e}")
            return None

        if result.returncode != 0:
            logger.warning(f"Ping to {host} exited with status {result.returncode}")
            return None

        latency = parse_latency(result.stdout)
        if latency is None:
            logger.warning(f"Ping to {host} succeeded but no latency was found")
        return latency
