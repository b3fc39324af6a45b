"""Shared utilities for the playground builder."""
