from abc import ABC, abstractmethod
from typing import Any, Dict, Optional
import logging

from app.models.eta import Coordinates

logger = logging.getLogger(__name__)


class RoutingProvider(ABC):
    """
    Abstract turn-by-turn routing provider.

    Contract:
    - Input: origin and destination Coordinates
    - Output: the provider's raw JSON body as a dict, shaped like
      {"routes": [{"duration": s, "distance": m,
                   "legs": [{"annotation": {"congestion": [...]}}]}]}
      or None when no route could be obtained.
    - MUST NEVER raise upstream exceptions; failures are logged.
    - MUST NOT issue a request when is_enabled() is False.
    """

    @abstractmethod
    def is_enabled(self) -> bool:
        """True when the provider has the credentials it needs."""
        pass

    @abstractmethod
    def get_route(self, origin: Coordinates, destination: Coordinates) -> Optional[Dict[str, Any]]:
        raise NotImplementedError
