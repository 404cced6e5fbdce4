"""
opencloud package initializer.

opencloud builds ready-to-use, authenticated clients for the services of an
OpenStack-style cloud. See :class:`opencloud.client.OpenCloud` for the
entry point and :class:`opencloud.common.service.Builder` for the machinery.

The package exposes a ``__version__`` attribute read from the installed
distribution metadata.
"""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("opencloud")
except PackageNotFoundError:
    # Package is not installed (running from source without pip install -e .)
    __version__ = "0.0.0.dev"

from opencloud.client import OpenCloud  # noqa: E402

__all__: list[str] = ["OpenCloud", "__version__"]
