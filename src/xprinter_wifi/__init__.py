"""Network configuration for Xprinter thermal receipt printers."""

__version__ = "0.1.0"
