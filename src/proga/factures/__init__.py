"""Facturation: lignes et totaux HT / TVA / TTC."""

from proga.factures.modeles import (
    LigneFacture,
    TotauxFacture,
    calculer_totaux_facture,
    charger_lignes,
)

__all__ = ["LigneFacture", "TotauxFacture", "calculer_totaux_facture", "charger_lignes"]
