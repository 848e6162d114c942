"""
HTTP routers.  Each module exposes an ``APIRouter`` named ``router``
that ``main.create_app`` mounts on the application.
"""
