"""
Service layer package.

Each service module encapsulates one domain of orchestration logic.
Services are the only layer that uses the backend client; routes never
call the hosted backend directly.

Import services in route modules as needed::

    from statusman.services import organization_service
"""
