import string

MAX_HOST_LENGTH = 255
ALLOWED_HOST_CHARS = frozenset(string.ascii_letters + string.digits + ".-")


def is_safe_host(host: str) -> bool:
    """
    Allowlist check for a host string before it reaches a prober.

    Accepts 1-255 characters drawn only from ASCII letters, digits, '.' and '-'.
    This is not a DNS validity check.
    """
    if not host or len(host) > MAX_HOST_LENGTH:
        return False
    return all(c in ALLOWED_HOST_CHARS for c in host)
