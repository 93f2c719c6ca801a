"""Parsers for macOS system data."""