"""
File-based dictionary repository.

Persists a DataDictionary at a configured storage path and supports
import/export to arbitrary files. The file format follows the suffix:
.yaml/.yml is YAML, anything else is JSON.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

from ..registry.dictionary import DataDictionary
from .serializer import DictionarySerializationError, DictionarySerializer

logger = logging.getLogger(__name__)

YAML_SUFFIXES = (".yaml", ".yml")


def _is_yaml(path: Path) -> bool:
    return path.suffix.lower() in YAML_SUFFIXES


class DictionaryRepository:
    """Reads and writes dictionary snapshot files."""

    def __init__(self, storage_path: str | Path, serializer: DictionarySerializer | None = None):
        self._storage_path = Path(storage_path)
        self._serializer = serializer or DictionarySerializer()

    @property
    def storage_path(self) -> Path:
        return self._storage_path

    def save(self, dictionary: DataDictionary) -> None:
        """Save the dictionary to the configured storage path."""
        self.export_to(dictionary, self._storage_path)

    def load(self) -> DataDictionary:
        """
        Load the dictionary from the configured storage path.

        Raises:
            DictionarySerializationError: If the file is missing, unreadable
                or does not hold a valid snapshot
        """
        return self.import_from(self._storage_path)

    def exists(self) -> bool:
        return self._storage_path.is_file()

    def export_to(self, dictionary: DataDictionary, target: str | Path) -> None:
        """
        Write the dictionary to an arbitrary file, creating parent directories.

        Args:
            dictionary: The dictionary to export
            target: Destination file; .yaml/.yml selects YAML, otherwise JSON

        Raises:
            DictionarySerializationError: If the file cannot be written
        """
        path = Path(target)
        if _is_yaml(path):
            text = self._serializer.to_yaml(dictionary)
        else:
            text = self._serializer.to_json(dictionary)

        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            with open(path, "w", encoding="utf-8") as f:
                f.write(text)
                f.flush()
                os.fsync(f.fileno())
        except OSError as e:
            raise DictionarySerializationError(f"Failed to write dictionary to {path}: {e}") from e

        logger.info(f"Saved dictionary ({dictionary.count()['total']} objects) to {path}")

    def import_from(self, source: str | Path) -> DataDictionary:
        """
        Read a dictionary from an arbitrary file.

        Raises:
            DictionarySerializationError: If the file cannot be read or decoded
        """
        path = Path(source)
        try:
            with open(path, "r", encoding="utf-8") as f:
                text = f.read()
        except (OSError, UnicodeDecodeError) as e:
            raise DictionarySerializationError(f"Failed to read dictionary from {path}: {e}") from e

        if _is_yaml(path):
            dictionary = self._serializer.from_yaml(text)
        else:
            dictionary = self._serializer.from_json(text)
        logger.info(f"Loaded dictionary from {path}")
        return dictionary
