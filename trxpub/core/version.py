from __future__ import annotations

from importlib.metadata import PackageNotFoundError, version


def get_trxpub_version() -> str:
    """Installed distribution version, ``dev`` when running from a checkout."""
    try:
        return version("trxpub")
    except PackageNotFoundError:
        return "dev"
