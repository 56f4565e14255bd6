"""hostlayout — nested folder layout for SSH hosts."""

__version__ = "0.1.0"
