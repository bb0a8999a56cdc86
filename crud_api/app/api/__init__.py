"""
HTTP layer: routers, request gates and shared dependencies.

``router`` bundles the resource endpoints that ``main`` mounts under
``/api``.
"""
