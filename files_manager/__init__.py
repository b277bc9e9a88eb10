"""Files manager HTTP routing package.

Exposes the package version; the route table lives in `files_manager.routing`
and the FastAPI host in `files_manager.main`.
"""
from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("files-manager-routes")
except PackageNotFoundError:  # pragma: no cover
    __version__ = "0.0.0"
