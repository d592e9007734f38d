"""API: app FastAPI, lifespan y handlers de excepciones."""
