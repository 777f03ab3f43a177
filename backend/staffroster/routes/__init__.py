# Routes package init
"""
StaffRoster Backend: API Routes Package
=========================================

Route Inventory:
    - employees.py:  POST/GET     {prefix}        (create, list)
                     GET/PUT/DEL  {prefix}/{id}   (get, update, delete)
    - health.py:     GET /health                  (service health check)

Routes are thin: they extract request data, call EmployeeService and return
the response model. Business rules live in services/.
"""
