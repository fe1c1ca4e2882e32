"""Salvo: a human-versus-computer Battleship game."""

__version__ = "0.1.0"
