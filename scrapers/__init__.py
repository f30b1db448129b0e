"""Upstream catalog clients and response mappers."""
