"""Lignes de facture et totaux HT / TVA / TTC.

Les totaux sont cumules ligne par ligne sans arrondi, puis arrondis a
l'unite (le franc CFA n'a pas de subdivision). Le total de TVA d'une
facture alimente la TVA collectee d'une evaluation fiscale.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from pathlib import Path
from typing import Iterable

import yaml
from pydantic import BaseModel, Field, TypeAdapter, field_validator
from pydantic import ValidationError as PydanticValidationError

from proga.erreurs import ValidationError

logger = logging.getLogger(__name__)

UNITE = Decimal("1")


class LigneFacture(BaseModel):
    """Ligne de facture; taux_tva en pourcentage (ex: 18 pour 18%)."""

    designation: str = ""
    quantite: Decimal
    prix_unitaire: Decimal
    taux_tva: Decimal | None = Field(default=None, ge=0)

    @field_validator("quantite", "prix_unitaire", "taux_tva", mode="before")
    @classmethod
    def _coerce_decimal(cls, v: object) -> object:
        if isinstance(v, float):
            return Decimal(str(v))
        return v

    @property
    def montant_ht(self) -> Decimal:
        return self.quantite * self.prix_unitaire

    @property
    def montant_tva(self) -> Decimal:
        if not self.taux_tva:
            return Decimal("0")
        return self.taux_tva / 100 * self.montant_ht


@dataclass(frozen=True)
class TotauxFacture:
    ht: Decimal
    tva: Decimal
    ttc: Decimal


def _arrondir_unite(montant: Decimal) -> Decimal:
    return montant.quantize(UNITE, rounding=ROUND_HALF_UP)


def calculer_totaux_facture(lignes: Iterable[LigneFacture]) -> TotauxFacture:
    """Calcule les totaux d'une facture.

    ttc est arrondi a partir de la somme non arrondie ht + tva, et peut donc
    differer d'une unite de ht + tva arrondis separement.
    """
    ht = Decimal("0")
    tva = Decimal("0")
    for ligne in lignes:
        ht += ligne.montant_ht
        tva += ligne.montant_tva
    return TotauxFacture(
        ht=_arrondir_unite(ht),
        tva=_arrondir_unite(tva),
        ttc=_arrondir_unite(ht + tva),
    )


_ADAPTATEUR_LIGNES = TypeAdapter(list[LigneFacture])


def charger_lignes(chemin: str | Path) -> list[LigneFacture]:
    """Charge les lignes d'une facture depuis un fichier YAML.

    Format attendu: une cle 'lignes' contenant la liste, ex:

        lignes:
          - designation: Prestation
            quantite: 2
            prix_unitaire: "50000"
            taux_tva: 18

    Raises:
        FileNotFoundError: Si le fichier n'existe pas.
        ValidationError: Si le contenu est invalide.
    """
    path = Path(chemin)
    if not path.exists():
        raise FileNotFoundError(f"Fichier de facture introuvable: {chemin}")

    try:
        raw = yaml.safe_load(path.read_text(encoding="utf-8"))
    except yaml.YAMLError as e:
        raise ValidationError(f"Facture invalide dans {chemin}: YAML illisible ({e})") from e
    if raw is None:
        raw = {}
    if not isinstance(raw, dict):
        raise ValidationError(f"Facture invalide dans {chemin}: une cle 'lignes' est attendue")
    try:
        lignes = _ADAPTATEUR_LIGNES.validate_python(raw.get("lignes") or [])
    except PydanticValidationError as e:
        raise ValidationError(f"Facture invalide dans {chemin}: {e}") from e

    logger.debug("Facture chargee depuis %s (%d lignes)", chemin, len(lignes))
    return lignes
