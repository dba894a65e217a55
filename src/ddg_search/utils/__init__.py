"""Shared helpers: errors, logging and normalisation."""
