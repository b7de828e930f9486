"""Exceptions du moteur fiscal et du grand livre.

Le coeur de calcul ne rattrape jamais ses propres erreurs: il produit un
resultat pour une entree bien formee, ou leve immediatement.
"""


class ProgaError(Exception):
    """Erreur de base de Proga."""


class ConfigurationError(ProgaError, ValueError):
    """Bareme ou parametre de calcul incoherent (ex: plafonds non croissants)."""


class ValidationError(ProgaError, ValueError):
    """Donnee d'entree invalide (montant non fini, compte vide, etc.)."""
