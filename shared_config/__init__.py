"""Sync shared configuration files from Homebrew/brew into other repositories."""

__version__ = "0.1.0"
