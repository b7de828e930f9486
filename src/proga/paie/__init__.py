"""Paie de l'emploi a domicile."""

from proga.paie.emploi import (
    TAUX_COTISATIONS_EMPLOYE,
    TAUX_COTISATIONS_EMPLOYEUR,
    ContratEmploi,
    FichePaie,
    StatutContrat,
    TypeEmploi,
    calculer_fiche_paie,
    enregistrer_fiche,
    masse_salariale,
)

__all__ = [
    "TAUX_COTISATIONS_EMPLOYE",
    "TAUX_COTISATIONS_EMPLOYEUR",
    "ContratEmploi",
    "FichePaie",
    "StatutContrat",
    "TypeEmploi",
    "calculer_fiche_paie",
    "enregistrer_fiche",
    "masse_salariale",
]
