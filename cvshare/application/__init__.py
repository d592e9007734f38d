"""
Application layer: casos de uso, rate limiter y helpers de compartición.

No importa infraestructura; recibe puertos por constructor.
"""
