"""Client IP extraction and anonymization."""

from ipaddress import IPv4Address, IPv6Address, ip_address

from fastapi import Request

from app.utils.helpers import host


def parse_ip(value: str) -> IPv4Address | IPv6Address | None:
    try:
        return ip_address(value.strip())
    except ValueError:
        return None


def client_ip(request: Request) -> str:
    """
    Resolve the originating client IP of a request.

    Takes the first entry of ``X-Forwarded-For`` when it is a valid address,
    then ``X-Real-IP``, then the socket peer address.

    Args:
        request: Incoming request

    Returns:
        str: Client IP address
    """
    if forwarded := request.headers.get("x-forwarded-for"):
        first = forwarded.split(",")[0].strip()
        if parse_ip(first):
            return first

    if real_ip := request.headers.get("x-real-ip"):
        real_ip = real_ip.strip()
        if parse_ip(real_ip):
            return real_ip

    return host(request)


def normalize_ip(value: str) -> str:
    """Return the canonical form of an IP, unwrapping IPv4-mapped IPv6."""
    parsed = parse_ip(value)
    if parsed is None:
        return value
    if isinstance(parsed, IPv6Address) and parsed.ipv4_mapped:
        return str(parsed.ipv4_mapped)
    return str(parsed)


def hash_ip(value: str) -> str:
    """
    Anonymize an IP address.

    IPv4 addresses lose their last octet, IPv6 addresses their last 80 bits.
    Unparseable input is returned unchanged.

    Examples:
    --------
    >>> hash_ip("192.168.1.42")
    '192.168.1.0'
    """
    parsed = parse_ip(value)
    if parsed is None:
        return value
    if isinstance(parsed, IPv6Address) and parsed.ipv4_mapped:
        parsed = parsed.ipv4_mapped
    if isinstance(parsed, IPv4Address):
        return str(IPv4Address(int(parsed) & 0xFFFFFF00))
    return str(IPv6Address(int(parsed) & ~((1 << 80) - 1)))
