"""Network endpoint of a span's remote peer."""

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class Endpoint:
    service_name: Optional[str] = None
    ipv4: Optional[str] = None
    ipv6: Optional[str] = None
    port: Optional[int] = None

    def address(self) -> Optional[str]:
        """Preferred IP address, IPv4 first."""
        return self.ipv4 or self.ipv6
