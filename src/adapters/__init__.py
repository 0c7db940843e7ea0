"""Adapters package: dashboard and command-line entry points."""
