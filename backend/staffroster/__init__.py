"""
StaffRoster Backend: Application Package Initializer
=====================================================

What: CRUD HTTP service over employee records.

Architecture Note:
    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← HTTP concerns only
    ├─────────────────────────────────────┤
    │   EmployeeService (Business Logic)  │  ← Validation, not-found mapping
    ├─────────────────────────────────────┤
    │      RecordStore (Persistence)      │  ← Injected store handle
    ├─────────────────────────────────────┤
    │   Models & Schemas / Database       │  ← SQLAlchemy ORM + Pydantic
    └─────────────────────────────────────┘
"""

__version__ = "1.0.0"
