"""
StaffRoster Backend: Abstract Record Store Interface
======================================================

What:  Abstract base class defining what EmployeeService needs from persistence.
Why:   The handler depends on this contract, not on a driver. The concrete
       store is constructed by the process bootstrap and injected.
How:   Concrete implementations inherit from RecordStore and implement every
       abstract coroutine below.
Who:   Called by EmployeeService.

Contract:
    - Absence is a first-class return value: find_by_id, replace_by_id and
      delete_by_id return None when no record has the identifier.
    - Every other failure (malformed identifier, lost connection, driver
      error) raises StoreError with the driver's message.
    - Identifiers are opaque strings assigned by the store on create and
      never changed afterwards.

Implementations:
    - SQLAlchemyRecordStore: async SQLAlchemy (PostgreSQL / SQLite)
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional

from staffroster.schemas.employee import EmployeeResponse


class RecordStore(ABC):
    """Persistence collaborator holding employee records keyed by opaque id."""

    @abstractmethod
    async def create(self, fields: Dict[str, Any]) -> EmployeeResponse:
        """
        Persist a new record with the given business fields.

        Returns:
            The persisted record including its newly assigned id.

        Raises:
            StoreError: The write failed.
        """
        ...

    @abstractmethod
    async def find_all(self) -> List[EmployeeResponse]:
        """Every record in the store, unfiltered and unpaginated."""
        ...

    @abstractmethod
    async def find_by_id(self, record_id: str) -> Optional[EmployeeResponse]:
        """
        Look up a record.

        Returns:
            The record, or None when no record has this id.

        Raises:
            StoreError: Malformed id or store failure.
        """
        ...

    @abstractmethod
    async def replace_by_id(
        self, record_id: str, fields: Dict[str, Any]
    ) -> Optional[EmployeeResponse]:
        """
        Overwrite the business fields of a record; the id is never altered.

        Returns:
            The post-update record, or None when no record has this id.
        """
        ...

    @abstractmethod
    async def delete_by_id(self, record_id: str) -> Optional[EmployeeResponse]:
        """
        Remove a record.

        Returns:
            The deleted record, or None when no record has this id.
        """
        ...

    @abstractmethod
    async def ping(self) -> bool:
        """
        Lightweight connectivity probe for the health check.

        Returns True if the store is reachable. Never raises.
        """
        ...
