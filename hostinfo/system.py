from __future__ import annotations

import ipaddress
import platform
import socket
import sys

import psutil

from .models import SystemInfo

UNKNOWN = "Unknown"
GIB = 1024 * 1024 * 1024

OS_NAMES = {
    "linux": "Linux",
    "darwin": "macOS",
    "win32": "Windows",
}


def os_name(platform_id: str) -> str:
    return OS_NAMES.get(platform_id, UNKNOWN)


def format_gib(num_bytes: int) -> str:
    return f"{num_bytes / GIB:.2f} GB"


def get_ip_address() -> str:
    """Return the first non-loopback IPv4 address found on any interface."""
    for addresses in psutil.net_if_addrs().values():
        for addr in addresses:
            if addr.family == socket.AF_INET and not ipaddress.ip_address(addr.address).is_loopback:
                return addr.address
    return UNKNOWN


def collect_system_info() -> SystemInfo:
    memory = psutil.virtual_memory()
    return SystemInfo(
        hostname=socket.gethostname(),
        ip_address=get_ip_address(),
        platform=sys.platform,
        release=platform.release(),
        architecture=platform.machine(),
        total_memory=format_gib(memory.total),
        free_memory=format_gib(memory.available),
        os_name=os_name(sys.platform),
    )
