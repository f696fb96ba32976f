"""Flux CLI — Typer application."""
