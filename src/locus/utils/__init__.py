"""Shared utilities for locus."""
