"""Electron frontend build."""

from .service import FrontendBuilder, app_bundle_path

__all__ = ["FrontendBuilder", "app_bundle_path"]
