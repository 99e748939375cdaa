from abc import ABC, abstractmethod
from typing import Optional


class AddressClassifier(ABC):
    """
    Interface for mapping a page address to a group identity.
    Must be pure and deterministic: no I/O, no state.
    Returns None when the address cannot be classified.
    """
    @abstractmethod
    def classify(self, address: str) -> Optional[str]:
        pass
