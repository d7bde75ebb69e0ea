"""difi: review pending version-control changes file by file."""

__version__ = "0.3.0"
