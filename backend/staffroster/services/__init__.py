# Services package init
"""
StaffRoster Backend: Services Layer
=====================================

What:  Business logic between routes (HTTP) and the record store (persistence).

Service Inventory:
    - RecordStore (abstract): What the handler needs from persistence
    - SQLAlchemyRecordStore: Concrete store on async SQLAlchemy
    - EmployeeService: Validation, lookup and mutation of employee records

EmployeeService receives its store through the constructor; routes obtain
one per request via a FastAPI dependency.
"""
