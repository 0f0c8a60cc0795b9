"""
Survey Store interface.

Two backends implement it:
- FileSurveyStore: JSON file on local disk, oldest record first
- FirestoreSurveyStore: Firestore collection, newest record first

Callers must not assume the same ordering across backends; check
`ordering` when it matters.
"""
from abc import ABC, abstractmethod
from typing import List

from civic_chat.models.survey import SurveyResponse

OLDEST_FIRST = "oldest_first"
NEWEST_FIRST = "newest_first"


class SurveyStore(ABC):
    """Append-only store of survey responses."""

    backend_name: str = "abstract"
    ordering: str = OLDEST_FIRST

    @abstractmethod
    def add(self, entry: SurveyResponse) -> None:
        """
        Persist a response.

        Raises:
            StoreUnavailableError: If the backend could not be written
        """

    @abstractmethod
    def list(self) -> List[SurveyResponse]:
        """
        Return every stored response in the backend's documented order.

        Raises:
            StoreUnavailableError: If the backend could not be read
        """

    def close(self) -> None:
        """Release backend resources."""
