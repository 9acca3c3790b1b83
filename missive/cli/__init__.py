"""Command line interface for missive."""
