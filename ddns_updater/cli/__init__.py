"""
Command-line interface components.

The entry point lives in ddns_updater.cli.main.
"""
