"""
daedalus-installer: builds the signed macOS installer for Daedalus.

Packages the Electron frontend together with the Cardano node backend into
an .app bundle, wraps it in a .pkg with a postinstall hook, and signs it.
"""

__version__ = "1.0.0"
__author__ = "Daedalus Team"
