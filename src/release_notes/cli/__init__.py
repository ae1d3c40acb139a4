"""Command line interface for release-notes."""
