"""
Service layer abstraction.

Services encapsulate the data access logic for a resource.  The API
handlers only talk to services, so the flat JSON store can be
replaced without touching the routes.
"""
