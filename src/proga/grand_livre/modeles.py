"""Modeles du grand livre: ecriture en partie double, soldes et sections du bilan."""

from __future__ import annotations

import datetime
from dataclasses import dataclass
from decimal import Decimal
from typing import Annotated, Any

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field


def _rejeter_float(v: Any) -> Any:
    """Refuse les float pour forcer l'utilisation de Decimal ou str."""
    if isinstance(v, float):
        raise ValueError(
            "Les montants doivent etre Decimal ou str, jamais float. "
            "Utilisez Decimal('100.00') ou '100.00'."
        )
    return v


MontantDecimal = Annotated[Decimal, BeforeValidator(_rejeter_float)]


class EcritureComptable(BaseModel):
    """Ecriture du journal: un compte debite, un compte credite, un montant.

    Immuable une fois creee; le journal ne fait qu'ajouter ou supprimer.
    Le modele ne verifie pas la validite metier (montant positif, comptes
    non vides): voir valider_ecriture.
    """

    model_config = ConfigDict(
        frozen=True,
        json_schema_extra={
            "examples": [
                {
                    "id": "5b7c0e7e-2f0a-4d7e-9a51-0d1b8f3c1a42",
                    "espace": "defaut",
                    "date": "2026-01-15",
                    "description": "Vente comptant",
                    "compte_debit": "512",
                    "compte_credit": "701",
                    "montant": "100000",
                }
            ]
        },
    )

    id: str
    espace: str
    date: datetime.date
    description: str = ""
    compte_debit: str
    compte_credit: str
    montant: MontantDecimal = Field(description="Montant en Decimal, jamais float")
    reference: str | None = None
    tags: tuple[str, ...] = ()
    cree_le: datetime.datetime | None = None


@dataclass(frozen=True)
class SoldeCompte:
    """Totaux d'un compte; solde = debit - credit."""

    compte: str
    libelle: str
    debit: Decimal
    credit: Decimal
    solde: Decimal


@dataclass(frozen=True)
class SectionBilan:
    """Section du bilan; total = somme signee des soldes (debit - credit)."""

    titre: str
    comptes: tuple[SoldeCompte, ...]
    total: Decimal


@dataclass(frozen=True)
class StatistiquesGrandLivre:
    total_debit: Decimal
    total_credit: Decimal
    ecart: Decimal
