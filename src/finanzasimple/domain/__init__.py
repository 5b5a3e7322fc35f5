"""Protocols the services depend on."""
