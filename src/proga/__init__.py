"""Proga - moteur de calcul fiscal et grand livre."""

__version__ = "0.1.0"
