"""Interfaces: adaptadores de entrada (HTTP)."""
