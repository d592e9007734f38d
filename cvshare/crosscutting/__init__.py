"""Crosscutting: config, logging, errores RFC7807, middleware y rate limiting."""
