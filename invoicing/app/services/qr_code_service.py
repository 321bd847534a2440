"""QR Code Service Interface"""

from abc import ABC, abstractmethod
from typing import List


class QrCodeService(ABC):

    @abstractmethod
    def matrix(self, data: str) -> List[List[bool]]:
        """
        Encode data as a square module matrix

        Args:
            data: Payload to encode

        Returns:
            Rows of modules, True for dark; no quiet zone
        """
        pass
