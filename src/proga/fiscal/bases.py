"""Bases fiscales d'une evaluation et orchestration des calculs.

Chaque impot a sa propre sous-structure optionnelle: None signifie
"non applicable pour cette evaluation", ce qui est distinct d'une base a zero.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from decimal import Decimal
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, ConfigDict, Field
from pydantic import ValidationError as PydanticValidationError

from proga.erreurs import ValidationError
from proga.fiscal.calcul import (
    ResultatCSS,
    ResultatIRPP,
    ResultatISvsIMF,
    ResultatTVA,
    calculer_css,
    calculer_irpp,
    calculer_is_vs_imf,
    calculer_tva,
)
from proga.fiscal.taux import (
    BAREME_IRPP_DEFAUT,
    TAUX_CSS_DEFAUT,
    TAUX_IS_DEFAUT,
    TrancheImposition,
)

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Modeles Pydantic des bases
# ---------------------------------------------------------------------------


class BaseTVA(BaseModel):
    """TVA collectee et deductible de la periode."""

    collectee: Decimal
    deductible: Decimal
    taux: Decimal | None = None  # Informatif, non utilise par le calcul


class BaseCSS(BaseModel):
    base: Decimal
    exclusions: Decimal | None = None
    taux: Decimal | None = None


class BaseImposition(BaseModel):
    """Base d'un impot a taux unique (IS ou IMF)."""

    base: Decimal
    taux: Decimal | None = None


class BaseIRPP(BaseModel):
    base: Decimal
    quotient: Decimal
    tranches: list[TrancheImposition] | None = None


class BasesFiscales(BaseModel):
    """Instantane des bases fiscales pour une evaluation."""

    model_config = ConfigDict(populate_by_name=True)

    tva: BaseTVA | None = None
    css: BaseCSS | None = None
    is_: BaseImposition | None = Field(default=None, alias="is")
    imf: BaseImposition | None = None
    irpp: BaseIRPP | None = None


# ---------------------------------------------------------------------------
# Resultats
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class ResultatsFiscaux:
    """Resultats d'une evaluation; None pour chaque impot non applicable."""

    tva: ResultatTVA | None
    css: ResultatCSS | None
    is_vs_imf: ResultatISvsIMF | None
    irpp: ResultatIRPP | None

    def total_du(self) -> Decimal:
        """Somme des montants dus des impots applicables."""
        resultats = (self.tva, self.css, self.is_vs_imf, self.irpp)
        return sum((r.montant for r in resultats if r is not None), Decimal("0"))


# ---------------------------------------------------------------------------
# Chargement et evaluation
# ---------------------------------------------------------------------------


def valider_bases(raw: Any) -> BasesFiscales:
    """Valide un dictionnaire (ex: issu d'un YAML ou d'un formulaire) en BasesFiscales.

    Raises:
        ValidationError: Si la structure ou une valeur est invalide.
    """
    if raw is None:
        raw = {}
    try:
        return BasesFiscales.model_validate(raw)
    except PydanticValidationError as e:
        raise ValidationError(f"Bases fiscales invalides: {e}") from e


def charger_bases(chemin: str | Path) -> BasesFiscales:
    """Charge les bases fiscales depuis un fichier YAML.

    Cles reconnues: tva, css, is, imf, irpp. Une cle absente signifie que
    l'impot ne s'applique pas.

    Raises:
        FileNotFoundError: Si le fichier n'existe pas.
        ValidationError: Si le contenu est invalide.
    """
    path = Path(chemin)
    if not path.exists():
        raise FileNotFoundError(f"Fichier de bases fiscales introuvable: {chemin}")

    try:
        raw = yaml.safe_load(path.read_text(encoding="utf-8"))
    except yaml.YAMLError as e:
        raise ValidationError(f"Bases fiscales invalides dans {chemin}: YAML illisible ({e})") from e
    logger.debug("Bases fiscales chargees depuis %s", chemin)
    return valider_bases(raw)


def evaluer_bases_fiscales(bases: BasesFiscales | dict) -> ResultatsFiscaux:
    """Evalue chaque impot dont la base est presente.

    Pour IS/IMF: la comparaison est faite des que l'une des deux bases est
    presente. Le chiffre d'affaires retombe sur la base IS quand aucune base
    IMF distincte n'est fournie (imf.base ?? is.base ?? 0).
    """
    if not isinstance(bases, BasesFiscales):
        bases = valider_bases(bases)

    tva = None
    if bases.tva is not None:
        tva = calculer_tva(bases.tva.collectee, bases.tva.deductible)

    css = None
    if bases.css is not None:
        css = calculer_css(
            bases.css.base,
            bases.css.exclusions if bases.css.exclusions is not None else Decimal("0"),
            bases.css.taux if bases.css.taux is not None else TAUX_CSS_DEFAUT,
        )

    is_vs_imf = None
    if bases.is_ is not None or bases.imf is not None:
        base_is = bases.is_.base if bases.is_ is not None else Decimal("0")
        if bases.imf is not None:
            chiffre_affaires = bases.imf.base
        else:
            chiffre_affaires = base_is
        taux_is = TAUX_IS_DEFAUT
        if bases.is_ is not None and bases.is_.taux is not None:
            taux_is = bases.is_.taux
        is_vs_imf = calculer_is_vs_imf(base_is, chiffre_affaires, taux_is)

    irpp = None
    if bases.irpp is not None:
        irpp = calculer_irpp(
            bases.irpp.base,
            bases.irpp.quotient,
            bases.irpp.tranches if bases.irpp.tranches is not None else BAREME_IRPP_DEFAUT,
        )

    return ResultatsFiscaux(tva=tva, css=css, is_vs_imf=is_vs_imf, irpp=irpp)
