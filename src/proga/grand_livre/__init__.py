"""Grand livre: ecritures en partie double, soldes par compte et bilan."""

from proga.grand_livre.journal import DepotJournal, DepotMemoire, DepotYaml, Journal
from proga.grand_livre.modeles import (
    EcritureComptable,
    SectionBilan,
    SoldeCompte,
    StatistiquesGrandLivre,
)
from proga.grand_livre.soldes import (
    calculer_soldes,
    calculer_statistiques,
    categoriser_compte,
    generer_bilan,
    libelle_compte,
    valider_ecriture,
)

__all__ = [
    "DepotJournal",
    "DepotMemoire",
    "DepotYaml",
    "Journal",
    "EcritureComptable",
    "SectionBilan",
    "SoldeCompte",
    "StatistiquesGrandLivre",
    "calculer_soldes",
    "calculer_statistiques",
    "categoriser_compte",
    "generer_bilan",
    "libelle_compte",
    "valider_ecriture",
]
