"""
StaffRoster Backend: SQLAlchemy Record Store
==============================================

What:  RecordStore implementation on async SQLAlchemy.
Why:   Keeps every SQL and driver concern out of EmployeeService.
How:   Each operation opens its own session from the injected factory and
       commits (or rolls back) before returning. Driver exceptions and
       malformed identifiers become StoreError with the original message.
Who:   Constructed by main.lifespan (or tests) and injected into EmployeeService.

Query plans:
    find_all:       SELECT * FROM employees
    find_by_id:     primary key lookup (session.get)
    replace_by_id:  primary key lookup + UPDATE of the four business columns
    delete_by_id:   primary key lookup + DELETE
"""

import logging
import uuid
from contextlib import asynccontextmanager
from typing import Any, AsyncGenerator, Dict, List, Optional, Union

from sqlalchemy import select, text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from staffroster.exceptions import StoreError
from staffroster.models.employee import Employee
from staffroster.schemas.employee import EmployeeResponse
from staffroster.services.record_store import RecordStore

logger = logging.getLogger(__name__)

BUSINESS_FIELDS = ("name", "role", "salary", "terminated")


def _salary_out(value: Any) -> Union[int, float, None]:
    """NUMERIC comes back as Decimal; whole amounts are returned as int."""
    if value is None or isinstance(value, (int, float)):
        return value
    if value == value.to_integral_value():
        return int(value)
    return float(value)


def _to_record(row: Employee) -> EmployeeResponse:
    return EmployeeResponse(
        id=str(row.id),
        name=row.name,
        role=row.role,
        salary=_salary_out(row.salary),
        terminated=row.terminated,
    )


def _parse_id(record_id: str) -> uuid.UUID:
    """
    Convert an opaque id back to the primary key type.

    Raises:
        StoreError: The id does not have the store's identifier shape.
    """
    try:
        return uuid.UUID(str(record_id))
    except (ValueError, AttributeError, TypeError):
        raise StoreError(
            message=f'Cast to UUID failed for value "{record_id}" at path "id"',
            context={"record_id": record_id},
        )


class SQLAlchemyRecordStore(RecordStore):
    """
    Employee record store backed by an async SQLAlchemy session factory.

    The store does not own the engine; whoever built the session factory
    disposes the engine at shutdown.
    """

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]):
        self._session_factory = session_factory

    @asynccontextmanager
    async def _session(self) -> AsyncGenerator[AsyncSession, None]:
        """
        Session scope for one store call: commit on success, roll back and
        translate on failure.
        """
        async with self._session_factory() as session:
            try:
                yield session
                await session.commit()
            except (SQLAlchemyError, OSError) as e:
                await session.rollback()
                # DBAPI errors wrap the driver error in .orig; surface the driver text
                orig = getattr(e, "orig", None)
                message = str(orig) if orig is not None else str(e)
                logger.error("Record store error: %s", message)
                raise StoreError(
                    message=message,
                    context={"error_type": type(e).__name__},
                ) from e
            except Exception:
                await session.rollback()
                raise

    async def create(self, fields: Dict[str, Any]) -> EmployeeResponse:
        row = Employee(**{name: fields.get(name) for name in BUSINESS_FIELDS})
        async with self._session() as session:
            session.add(row)
            await session.flush()  # Assigns the primary key
            record = _to_record(row)
        logger.debug("Created employee %s", record.id)
        return record

    async def find_all(self) -> List[EmployeeResponse]:
        async with self._session() as session:
            result = await session.execute(select(Employee))
            return [_to_record(row) for row in result.scalars().all()]

    async def find_by_id(self, record_id: str) -> Optional[EmployeeResponse]:
        pk = _parse_id(record_id)
        async with self._session() as session:
            row = await session.get(Employee, pk)
            return _to_record(row) if row is not None else None

    async def replace_by_id(
        self, record_id: str, fields: Dict[str, Any]
    ) -> Optional[EmployeeResponse]:
        pk = _parse_id(record_id)
        async with self._session() as session:
            row = await session.get(Employee, pk)
            if row is None:
                return None
            # Whole-record replacement: every business column is overwritten
            for name in BUSINESS_FIELDS:
                setattr(row, name, fields.get(name))
            await session.flush()
            return _to_record(row)

    async def delete_by_id(self, record_id: str) -> Optional[EmployeeResponse]:
        pk = _parse_id(record_id)
        async with self._session() as session:
            row = await session.get(Employee, pk)
            if row is None:
                return None
            record = _to_record(row)
            await session.delete(row)
            await session.flush()
            return record

    async def ping(self) -> bool:
        try:
            async with self._session() as session:
                await session.execute(text("SELECT 1"))
            return True
        except Exception as e:
            logger.warning("Record store ping failed: %s", str(e))
            return False
