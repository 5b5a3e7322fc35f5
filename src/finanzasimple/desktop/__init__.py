"""Flet desktop shell."""
