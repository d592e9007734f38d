"""cvshare: backend de privacidad y control de acceso para CVs compartidos."""

__version__ = "0.1.0"
