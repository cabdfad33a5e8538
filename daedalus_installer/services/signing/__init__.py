"""Installer package signing and verification."""

from .service import PackageSigner

__all__ = ["PackageSigner"]
