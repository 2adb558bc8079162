"""A minimal plain HTTP GET used for small lookups."""

from __future__ import annotations

import socket

_RECV_SIZE = 4096


def http_get(host: str, path: str, timeout: int = 0) -> str:
    """Send one GET request to ``host`` on port 80 and return the first reply chunk.

    ``timeout`` is in milliseconds and limits the wait for the reply; 0 waits
    without limit. Any failure gives "".
    """
    try:
        infos = socket.getaddrinfo(host, "80", socket.AF_INET, socket.SOCK_STREAM)
    except (OSError, UnicodeError):
        return ""
    if not infos:
        return ""

    family, sock_type, proto, _, address = infos[0]
    request = f"GET {path} HTTP/1.1\nHost: {host}\r\n\r\n".encode("utf-8")

    try:
        with socket.socket(family, sock_type, proto) as sock:
            sock.connect(address)
            if timeout > 0:
                sock.settimeout(timeout / 1000)
            sock.sendall(request)
            data = sock.recv(_RECV_SIZE)
    except OSError:
        return ""
    return data.decode("utf-8", errors="replace")