"""Simulation IRPP d'un foyer: revenus par categorie, parts et taux effectif.

Combine le calcul des parts du quotient familial (situation + personnes a
charge) et calculer_irpp pour produire une SimulationIRPP complete.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from typing import Iterable

from pydantic import BaseModel, Field

from proga.fiscal.calcul import calculer_irpp
from proga.fiscal.taux import BAREME_IRPP_DEFAUT, TrancheImposition


class SituationFamiliale(str, Enum):
    """Situation matrimoniale du foyer."""

    CELIBATAIRE = "celibataire"
    MARIE = "marie"
    PACSE = "pacse"
    DIVORCE = "divorce"
    VEUF = "veuf"


PARTS_SITUATION: dict[SituationFamiliale, Decimal] = {
    SituationFamiliale.CELIBATAIRE: Decimal("1"),
    SituationFamiliale.MARIE: Decimal("2"),
    SituationFamiliale.PACSE: Decimal("2"),
    SituationFamiliale.DIVORCE: Decimal("1"),
    SituationFamiliale.VEUF: Decimal("1.5"),
}


def calculer_parts(situation: SituationFamiliale, personnes_a_charge: int) -> Decimal:
    """Nombre de parts du quotient familial.

    Une demi-part pour la premiere personne a charge, une part pour deux,
    puis une part supplementaire par personne au-dela de deux.
    """
    parts = PARTS_SITUATION.get(SituationFamiliale(situation), Decimal("1"))
    if personnes_a_charge <= 0:
        return parts
    if personnes_a_charge == 1:
        return parts + Decimal("0.5")
    if personnes_a_charge == 2:
        return parts + Decimal("1")
    return parts + Decimal("1") + (personnes_a_charge - 2)


class RevenusFoyer(BaseModel):
    """Revenus annuels declares par le foyer."""

    salaires: Decimal = Field(default=Decimal("0"), ge=0)
    loyers: Decimal = Field(default=Decimal("0"), ge=0)
    bic: Decimal = Field(default=Decimal("0"), ge=0)
    bnc: Decimal = Field(default=Decimal("0"), ge=0)
    dividendes: Decimal = Field(default=Decimal("0"), ge=0)
    deductions: Decimal = Field(default=Decimal("0"), ge=0)
    situation: SituationFamiliale = SituationFamiliale.CELIBATAIRE
    personnes_a_charge: int = Field(default=0, ge=0)

    @property
    def revenu_total(self) -> Decimal:
        return self.salaires + self.loyers + self.bic + self.bnc + self.dividendes


@dataclass(frozen=True)
class SimulationIRPP:
    revenu_total: Decimal
    base_imposable: Decimal
    parts: Decimal
    impot: Decimal
    base_par_part: Decimal
    taux_effectif: Decimal


def simuler_irpp(
    revenus: RevenusFoyer,
    tranches: Iterable[TrancheImposition] = BAREME_IRPP_DEFAUT,
) -> SimulationIRPP:
    """Simule l'IRPP du foyer.

    base_imposable = max(revenu_total - deductions, 0)
    taux_effectif = impot / revenu_total (0 si aucun revenu)
    """
    revenu_total = revenus.revenu_total
    base_imposable = max(revenu_total - revenus.deductions, Decimal("0"))
    quotient = calculer_parts(revenus.situation, revenus.personnes_a_charge)
    resultat = calculer_irpp(base_imposable, quotient, tranches)

    taux_effectif = Decimal("0")
    if revenu_total:
        taux_effectif = resultat.montant / revenu_total

    return SimulationIRPP(
        revenu_total=revenu_total,
        base_imposable=base_imposable,
        parts=resultat.parts,
        impot=resultat.montant,
        base_par_part=resultat.base_par_part,
        taux_effectif=taux_effectif,
    )
