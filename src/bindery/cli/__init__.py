"""Command-line interface for Bindery."""
