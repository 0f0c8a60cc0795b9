"""
File Survey Store - Survey responses kept in a local JSON file.

The whole store is one JSON array. Every add rewrites the full array
to a temporary sibling file and renames it over the target, so the
file on disk is always either the old or the new version, never a
partial write. Survey volume is low, so rewriting everything on each
append is acceptable.

Records that fail validation are hidden from list() but written back
unchanged, in their original position, on every rewrite.

Only one process may write a given file.
"""
import json
import os
from pathlib import Path
from typing import Any, List, Union

from pydantic import ValidationError as PydanticValidationError

from civic_chat.core.exceptions import StoreCorruptedError, StoreUnavailableError
from civic_chat.core.locks import ReadWriteLock
from civic_chat.core.logging_config import get_logger
from civic_chat.models.survey import SurveyResponse
from civic_chat.storage.base import OLDEST_FIRST, SurveyStore

logger = get_logger(__name__)


class FileSurveyStore(SurveyStore):
    """
    JSON-file backed survey store.

    Example:
        >>> store = FileSurveyStore("data/nps-responses.json")
        >>> store.add(response)
        >>> store.list()[-1] == response
        True
    """

    backend_name = "file"
    ordering = OLDEST_FIRST

    def __init__(self, path: Union[str, Path]):
        """
        Open the store, loading any existing responses.

        Args:
            path: Location of the JSON array file

        Raises:
            StoreCorruptedError: If the file exists but cannot be decoded
            StoreUnavailableError: If the file or its directory cannot be accessed
        """
        self.path = Path(path)
        self._tmp_path = self.path.with_name(self.path.name + ".tmp")
        self._responses: List[SurveyResponse] = []
        # Every record as persisted, including ones list() skips
        self._records: List[Any] = []
        self._lock = ReadWriteLock()

        self._load()

        logger.info(
            f"FileSurveyStore initialized: path={self.path}, "
            f"responses={len(self._responses)}"
        )

    def add(self, entry: SurveyResponse) -> None:
        with self._lock.write():
            self._responses.append(entry)
            self._records.append(entry.to_record())
            try:
                self._save_locked()
            except OSError as e:
                self._responses.pop()
                self._records.pop()
                logger.error(f"Failed to persist survey response to {self.path}: {e}")
                raise StoreUnavailableError("Could not save the survey response") from e

        logger.info(
            f"Survey response saved: score={entry.score}, "
            f"classification={entry.classification}"
        )

    def list(self) -> List[SurveyResponse]:
        """Copy of all responses, oldest first."""
        with self._lock.read():
            return list(self._responses)

    def close(self) -> None:
        logger.debug(f"FileSurveyStore closed: {self.path}")

    def _load(self) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            raw = self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            logger.info(f"Survey store file not found, starting empty: {self.path}")
            return
        except OSError as e:
            raise StoreUnavailableError(f"Could not read survey store: {e}") from e

        if not raw.strip():
            logger.warning(f"Survey store file is empty, starting empty: {self.path}")
            return

        try:
            data = json.loads(raw)
        except json.JSONDecodeError as e:
            raise StoreCorruptedError(str(self.path), str(e)) from e

        if not isinstance(data, list):
            raise StoreCorruptedError(
                str(self.path), f"expected a JSON array, found {type(data).__name__}"
            )

        self._records = data
        for index, record in enumerate(data):
            entry = self._decode_record(index, record)
            if entry is not None:
                self._responses.append(entry)

    def _decode_record(self, index: int, record: Any):
        try:
            return SurveyResponse.model_validate(record)
        except PydanticValidationError as e:
            logger.warning(
                f"Skipping malformed survey record #{index} in {self.path}: "
                f"{e.error_count()} error(s)"
            )
            return None

    def _save_locked(self) -> None:
        """Write every record to the temp file, then swap it in."""
        payload = json.dumps(
            self._records,
            ensure_ascii=False,
            indent=2,
        )

        with open(self._tmp_path, "w", encoding="utf-8") as handle:
            handle.write(payload)
            handle.flush()
            os.fsync(handle.fileno())

        os.replace(self._tmp_path, self.path)
