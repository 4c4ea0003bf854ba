"""fvm: home directory and configuration bootstrap for the fvm version manager."""

__version__ = "0.1.0"
