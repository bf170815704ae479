"""Batch generation command."""
