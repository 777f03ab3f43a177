"""
StaffRoster Backend: Employee SQLAlchemy Model
================================================

What:  ORM model representing the `employees` table.
Why:   Maps employee records to rows for the SQLAlchemy record store.
How:   Inherits from the declarative Base; Alembic reads this for migrations.
Who:   Used only by SQLAlchemyRecordStore. The service layer sees Employee
       schemas, never ORM rows.

Table Design Rationale:
    - UUID primary key generated in Python on insert; exposed to clients as an
      opaque string.
    - Business columns are nullable: updates are written as-is without
      validation, so a PUT with missing fields stores NULLs.
"""

import uuid
from decimal import Decimal
from typing import Optional

from sqlalchemy import Boolean, Numeric, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from staffroster.database import Base


class Employee(Base):
    """
    An employee record.

    Lifecycle:
        1. Inserted by RecordStore.create (id assigned here)
        2. Business columns replaced wholesale by RecordStore.replace_by_id
        3. Removed by RecordStore.delete_by_id (no soft delete; `terminated`
           is a business attribute)
    """

    __tablename__ = "employees"

    # Generic Uuid type: native UUID on PostgreSQL, CHAR(32) on SQLite
    id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4,
    )

    name: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    role: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    # Arbitrary-precision NUMERIC; the store hands integral values back as int
    salary: Mapped[Optional[Decimal]] = mapped_column(Numeric(asdecimal=True), nullable=True)
    terminated: Mapped[Optional[bool]] = mapped_column(Boolean, nullable=True)

    def __repr__(self) -> str:
        return f"<Employee(id={self.id}, name='{self.name}', role='{self.role}')>"
