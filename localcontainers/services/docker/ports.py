"""Resolution of published ports from an inspect response."""

from typing import Dict, List, Optional, Tuple

from ...models.container import MAX_PORT, ResolvedPortMapping, TransportProtocol
from .api_types import PortBinding


def _parse_port(value: Optional[str]) -> Optional[int]:
    """Parse an unsigned 16-bit port number, or None if it is not one."""
    if not value or not (value.isascii() and value.isdigit()):
        return None
    port = int(value)
    return port if port <= MAX_PORT else None


def _parse_port_key(key: str) -> Tuple[Optional[int], TransportProtocol]:
    """Split a key like ``8080/tcp`` into port and protocol."""
    port, _, proto = key.partition("/")
    protocol = TransportProtocol.UDP if proto == "udp" else TransportProtocol.TCP
    return _parse_port(port), protocol


def resolve_ports(
    port_map: Optional[Dict[str, Optional[List[PortBinding]]]],
) -> List[ResolvedPortMapping]:
    """Flatten ``NetworkSettings.Ports`` into resolved mappings.

    Keys with a null binding list were not published and are skipped, as
    are bindings whose host port is not a valid port number. Dual-stack
    engines report the same binding for IPv4 and IPv6; it is kept once.
    """
    if not port_map:
        return []

    resolved: List[ResolvedPortMapping] = []
    for key, bindings in port_map.items():
        if bindings is None:
            continue
        container_port, protocol = _parse_port_key(key)
        if container_port is None:
            continue

        for binding in bindings:
            host_port = _parse_port(binding.HostPort)
            if host_port is None:
                continue
            mapping = ResolvedPortMapping(
                container_port=container_port,
                host_port=host_port,
                protocol=protocol,
            )
            if mapping not in resolved:
                resolved.append(mapping)

    return resolved
