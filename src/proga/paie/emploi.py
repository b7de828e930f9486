"""Paie de l'emploi a domicile: contrats a taux horaire et fiches de paie.

Cotisations forfaitaires: 18% a la charge de l'employeur, 8% retenus sur le
salaire de l'employe. Les primes s'ajoutent au net apres retenues.
"""

from __future__ import annotations

import datetime
import logging
from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from typing import Iterable

from pydantic import BaseModel, Field

from proga.erreurs import ValidationError
from proga.grand_livre.modeles import MontantDecimal
from proga.montants import Nombre, en_decimal

logger = logging.getLogger(__name__)

TAUX_COTISATIONS_EMPLOYEUR = Decimal("0.18")
TAUX_COTISATIONS_EMPLOYE = Decimal("0.08")


class TypeEmploi(str, Enum):
    """Nature de l'emploi a domicile."""

    MENAGE = "menage"
    GARDIEN = "gardien"
    NOUNOU = "nounou"
    CHAUFFEUR = "chauffeur"
    CUISINIER = "cuisinier"
    AUTRE = "autre"


class StatutContrat(str, Enum):
    ACTIF = "actif"
    RESILIE = "resilie"


class ContratEmploi(BaseModel):
    """Contrat d'emploi a domicile remunere a l'heure."""

    id: str
    espace: str
    employe: str
    type_emploi: TypeEmploi = TypeEmploi.AUTRE
    taux_horaire: MontantDecimal = Field(gt=0)
    date_debut: datetime.date | None = None
    date_fin: datetime.date | None = None
    statut: StatutContrat = StatutContrat.ACTIF


@dataclass(frozen=True)
class FichePaie:
    """Fiche de paie d'un contrat pour une periode (ex: '2026-03')."""

    contrat_id: str
    periode: str
    heures: Decimal
    brut: Decimal
    imposable: Decimal
    cotisations_employeur: Decimal
    cotisations_employe: Decimal
    primes: Decimal
    net: Decimal


def calculer_fiche_paie(
    contrat: ContratEmploi,
    periode: str,
    heures: Nombre,
    primes: Nombre = 0,
) -> FichePaie:
    """Calcule la fiche de paie d'une periode.

    brut = heures * taux_horaire
    net = brut - cotisations_employe + primes

    Raises:
        ValidationError: Si le nombre d'heures n'est pas strictement positif.
    """
    heures = en_decimal(heures, "heures")
    primes = en_decimal(primes, "primes")
    if heures <= 0:
        raise ValidationError("Le nombre d'heures doit etre superieur a 0")

    brut = heures * contrat.taux_horaire
    cotisations_employe = brut * TAUX_COTISATIONS_EMPLOYE
    return FichePaie(
        contrat_id=contrat.id,
        periode=periode,
        heures=heures,
        brut=brut,
        imposable=brut,
        cotisations_employeur=brut * TAUX_COTISATIONS_EMPLOYEUR,
        cotisations_employe=cotisations_employe,
        primes=primes,
        net=brut - cotisations_employe + primes,
    )


def enregistrer_fiche(fiches: Iterable[FichePaie], fiche: FichePaie) -> list[FichePaie]:
    """Ajoute une fiche; celle du meme contrat et de la meme periode est remplacee sur place."""
    resultat = []
    remplacee = False
    for existante in fiches:
        if existante.contrat_id == fiche.contrat_id and existante.periode == fiche.periode:
            resultat.append(fiche)
            remplacee = True
        else:
            resultat.append(existante)
    if remplacee:
        logger.info("Fiche de paie remplacee: %s %s", fiche.contrat_id, fiche.periode)
    else:
        resultat.append(fiche)
    return resultat


def masse_salariale(fiches: Iterable[FichePaie]) -> Decimal:
    """Somme des nets a payer."""
    return sum((f.net for f in fiches), Decimal("0"))
