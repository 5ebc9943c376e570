"""Bazar.com command-line client."""
