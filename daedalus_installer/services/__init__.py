"""Services package for the installer builder."""

from .backends import Backend, CardanoBackend, MantisBackend, backend_for
from .component_root import ComponentRootAssembler
from .frontend import FrontendBuilder
from .installer import InstallerBuilder
from .libraries import LibraryRewriter
from .signing import PackageSigner

__all__ = [
    "Backend",
    "CardanoBackend",
    "MantisBackend",
    "backend_for",
    "ComponentRootAssembler",
    "FrontendBuilder",
    "InstallerBuilder",
    "LibraryRewriter",
    "PackageSigner",
]
