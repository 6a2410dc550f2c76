import logging
import os
import socket
import struct
import time
from typing import Optional

from pingserver.abstractions.prober import Prober

logger = logging.getLogger(__name__)

ICMP_ECHO_REQUEST = 8
ICMP_ECHO_REPLY = 0
ICMP_HEADER = struct.Struct("!BBHHH")
PAYLOAD = b"pingserver-echo!" * 2


def checksum(data: bytes) -> int:
    """RFC 1071 internet checksum."""
    if len(data) % 2:
        data += b"\x00"
    total = sum(struct.unpack(f"!{len(data) // 2}H", data))
    total = (total >> 16) + (total & 0xFFFF)
    total += total >> 16
    return ~total & 0xFFFF


def build_echo_request(ident: int, seq: int, payload: bytes = PAYLOAD) -> bytes:
    header = ICMP_HEADER.pack(ICMP_ECHO_REQUEST, 0, 0, ident, seq)
    csum = checksum(header + payload)
    return ICMP_HEADER.pack(ICMP_ECHO_REQUEST, 0, csum, ident, seq) + payload


def parse_echo_reply(data: bytes) -> Optional[tuple[int, int]]:
    """
    Return (identifier, sequence) if ``data`` is an ICMP echo reply.

    Some platforms deliver the IPv4 header in front of the ICMP message even on
    datagram sockets; it is skipped when present.
    """
    if data and data[0] >> 4 == 4:
        data = data[(data[0] & 0x0F) * 4 :]
    if len(data) < ICMP_HEADER.size:
        return None
    icmp_type, _code, _csum, ident, seq = ICMP_HEADER.unpack_from(data)
    if icmp_type != ICMP_ECHO_REPLY:
        return None
    return ident, seq


class IcmpProber(Prober):
    """
    Prober that sends an ICMP echo request over an unprivileged datagram socket.

    On Linux this needs the process group to be inside
    ``net.ipv4.ping_group_range``; no external utility is executed.
    """

    def __init__(self):
        self._seq = 0

    def _next_seq(self) -> int:
        self._seq = (self._seq + 1) & 0xFFFF
        return self._seq

    def probe(self, host: str, timeout: float) -> Optional[float]:
        seq = self._next_seq()
        packet = build_echo_request(os.getpid() & 0xFFFF, seq)
        try:
            address = socket.gethostbyname(host)
            with socket.socket(
                socket.AF_INET, socket.SOCK_DGRAM, socket.IPPROTO_ICMP
            ) as sock:
                start = time.perf_counter()
                deadline = start + timeout
                sock.sendto(packet, (address, 0))
                while True:
                    remaining = deadline - time.perf_counter()
                    if remaining <= 0:
                        logger.warning(f"ICMP echo to {host} timed out")
                        return None
                    sock.settimeout(remaining)
                    data, _ = sock.recvfrom(1024)
                    reply = parse_echo_reply(data)
                    # The kernel rewrites the identifier on datagram sockets
                    if reply is not None and reply[1] == seq:
                        return (time.perf_counter() - start) * 1000.0
        except socket.timeout:
            logger.warning(f"ICMP echo to {host} timed out")
            return None
        except OSError as e:
            logger.error(f"ICMP echo to {host} failed: {e}")
            return None
