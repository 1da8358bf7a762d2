# The installed distribution's version goes into the user agent of
# outgoing requests. A source checkout that was never installed has none.
from importlib.metadata import PackageNotFoundError, version

try:
    __version__: str | None = version("ole-ils")
except PackageNotFoundError:
    __version__ = None

__all__ = ["__version__"]
