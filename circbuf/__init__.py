"""circbuf Python package: fixed-capacity circular byte buffer."""

from importlib.metadata import version, PackageNotFoundError

from loguru import logger

# library logging stays silent until the application calls logger.enable("circbuf")
logger.disable("circbuf")

__all__ = [
    "get_version",
]


def get_version() -> str:
    """Return package version if installed as distribution."""
    try:
        return version("circbuf")
    except PackageNotFoundError:
        return "0.0.0"
