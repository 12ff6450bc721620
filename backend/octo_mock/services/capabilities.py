# backend/octo_mock/services/capabilities.py
"""
Capabilities a caller can declare in the Octo-Capabilities header.

They only decide which optional fields a response carries.
"""

from enum import Enum


class Capability(str, Enum):
    CONTENT = "octo/content"
    PRICING = "octo/pricing"
    PICKUPS = "octo/pickups"


def parse_capabilities(header: str | None) -> list[Capability]:
    """Known capabilities from a comma separated header value, in header order."""
    if not header:
        return []

    known = {capability.value: capability for capability in Capability}
    capabilities: list[Capability] = []
    for raw in header.split(","):
        capability = known.get(raw.strip())
        if capability is not None and capability not in capabilities:
            capabilities.append(capability)
    return capabilities
