"""Inbound IO validation."""
