"""
Service layer abstraction.

Each service encapsulates the business rules for a domain and talks
to the SQLite store through ``core.db``.  API handlers only translate
between HTTP and service calls.
"""
