"""
Endpoint modules.

Each module defines an ``APIRouter`` for one resource (users, posts)
or for the service information routes.  The resource routers are
aggregated in ``api.router``; ``info`` is mounted at the root by
``main``.
"""
