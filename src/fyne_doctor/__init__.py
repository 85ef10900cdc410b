"""Check a machine for the tools needed to build Fyne applications."""

__version__ = "0.1.0"
