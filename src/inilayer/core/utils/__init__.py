"""Shared utilities for inilayer."""
