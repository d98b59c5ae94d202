"""latestview: browse a directory over HTTP and follow its newest file."""

from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as _version

try:
    __version__ = _version("latestview")
except PackageNotFoundError:
    __version__ = "0.0.0"
