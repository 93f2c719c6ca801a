"""Host and process information from Linux procfs, with parsers for macOS sysctl data and AIX utmp records."""

__version__ = "0.1.0"