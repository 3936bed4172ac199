"""
jsau-apiserver — Abstract Record Store Interface
================================================

What:  Abstract base class for the storage behind the recipe catalog and
       the favorites list.
Why:   Services only need "load all records" and "replace all records".
       Keeping that behind an interface lets the JSON files be swapped for an
       embedded store or a real database without touching handlers or services.
How:   Concrete implementations inherit from RecordStore and implement
       load() and save().

Contract:
    - load() returns the complete, current list of records
    - save() replaces the complete list of records
    - Failures are raised as StoreError subclasses (never OSError or
      json.JSONDecodeError), so services can map them to API errors
"""

from abc import ABC, abstractmethod
from typing import Any, List


class RecordStore(ABC):
    """
    Abstract interface for a whole-collection record store.

    Implementations:
        - JsonFileStore: one JSON array per file (default)
    """

    #: Human-readable location, used in log lines and error context
    location: str = "<unknown>"

    @abstractmethod
    async def load(self) -> List[Any]:
        """
        Return every record in the store.

        Raises:
            StoreMissingError: The backing storage does not exist.
            StoreCorruptError: The stored data is not a list of records.
            StoreError: Any other read failure.
        """
        ...

    @abstractmethod
    async def save(self, records: List[Any]) -> None:
        """
        Replace the stored records with `records`.

        Raises:
            StoreError: The write failed; the previous contents are left intact.
        """
        ...

    @abstractmethod
    async def exists(self) -> bool:
        """Whether the backing storage exists (used by the health check)."""
        ...
