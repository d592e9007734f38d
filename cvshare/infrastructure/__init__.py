"""Infrastructure layer: DB pool y adapters de repositorios."""
