"""Typed wrappers around individual storage endpoints."""
