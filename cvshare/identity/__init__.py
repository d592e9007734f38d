"""Identity: credenciales de CV (token/password) y autenticación JWT."""
