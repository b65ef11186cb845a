"""
Carrier registry - the fixed list of carriers a lookup can target
"""

import logging
from typing import Any, Dict, Iterable, Iterator, List, Optional, Tuple

from .models import Carrier

logger = logging.getLogger(__name__)


DEFAULT_CARRIERS: Tuple[Carrier, ...] = (
    Carrier(name="4PX", logo="/carrierlogos/4px.png", api_code="4px"),
)


class CarrierRegistry:
    """
    Immutable registry of carriers, keyed by ``api_code``.

    The first entry is the default selection of the search form.

    Example:
        registry = CarrierRegistry.from_config([
            {"name": "4PX", "logo": "/carrierlogos/4px.png", "api_code": "4px"},
        ])
        registry.get("4px").name  # "4PX"
    """

    def __init__(self, carriers: Iterable[Carrier] = DEFAULT_CARRIERS):
        self._carriers: Tuple[Carrier, ...] = tuple(carriers)
        if not self._carriers:
            raise ValueError("Carrier registry needs at least one carrier")

        self._by_code: Dict[str, Carrier] = {}
        for carrier in self._carriers:
            if carrier.api_code in self._by_code:
                raise ValueError(f"Duplicate carrier api_code: {carrier.api_code}")
            self._by_code[carrier.api_code] = carrier

    @classmethod
    def from_config(cls, entries: Optional[List[Dict[str, Any]]]) -> "CarrierRegistry":
        """Build a registry from config dicts; falls back to the defaults."""
        if not entries:
            return cls()
        return cls(Carrier.from_dict(entry) for entry in entries)

    @property
    def default(self) -> Carrier:
        return self._carriers[0]

    def get(self, api_code: str) -> Optional[Carrier]:
        """Look up a carrier by API code (case-sensitive)"""
        return self._by_code.get(api_code)

    def __contains__(self, api_code: object) -> bool:
        return api_code in self._by_code

    def __iter__(self) -> Iterator[Carrier]:
        return iter(self._carriers)

    def __len__(self) -> int:
        return len(self._carriers)

    def to_list(self) -> List[Dict[str, Any]]:
        return [c.to_dict() for c in self._carriers]
