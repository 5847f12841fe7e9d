"""Shared infrastructure: settings, logging, call context and metaclasses."""
