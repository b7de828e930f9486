"""Taux par defaut et bareme progressif de l'IRPP.

Toutes les valeurs sont en Decimal -- jamais de float.
Les taux par defaut sont des constantes; un appelant les remplace en les
passant explicitement aux fonctions de calcul.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from decimal import Decimal
from pathlib import Path
from typing import Iterable

import yaml
from pydantic import TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from proga.erreurs import ConfigurationError
from proga.montants import en_decimal

logger = logging.getLogger(__name__)

TAUX_CSS_DEFAUT = Decimal("0.032")
TAUX_IS_DEFAUT = Decimal("0.25")
TAUX_IMF = Decimal("0.015")  # Fixe, non parametrable par appel


@dataclass(frozen=True)
class TrancheImposition:
    """Tranche d'un bareme progressif.

    plafond: borne superieure de la tranche, None = non plafonnee (derniere).
    taux: taux applique a la portion du revenu dans la tranche (0..1).
    abattement: montant forfaitaire retranche une fois quand la tranche est atteinte.
    """

    plafond: Decimal | None
    taux: Decimal
    abattement: Decimal | None = None


BAREME_IRPP_DEFAUT: tuple[TrancheImposition, ...] = (
    TrancheImposition(plafond=Decimal("2000000"), taux=Decimal("0")),
    TrancheImposition(plafond=Decimal("5000000"), taux=Decimal("0.10")),
    TrancheImposition(plafond=Decimal("12000000"), taux=Decimal("0.20")),
    TrancheImposition(plafond=Decimal("30000000"), taux=Decimal("0.30")),
    TrancheImposition(plafond=Decimal("60000000"), taux=Decimal("0.35")),
    TrancheImposition(plafond=None, taux=Decimal("0.40")),
)


def valider_bareme(
    tranches: Iterable[TrancheImposition],
) -> tuple[TrancheImposition, ...]:
    """Valide un bareme et le normalise en Decimal.

    Regles: au moins une tranche, plafonds strictement croissants et positifs,
    exactement une tranche non plafonnee placee en dernier, taux dans [0, 1],
    abattement positif ou nul.

    Returns:
        Le bareme sous forme de tuple de tranches aux valeurs Decimal.

    Raises:
        ConfigurationError: Si le bareme viole une de ces regles.
        ValidationError: Si une valeur n'est pas un nombre fini.
    """
    tranches = tuple(tranches)
    if not tranches:
        raise ConfigurationError("Bareme vide: au moins une tranche est requise")

    normalisees: list[TrancheImposition] = []
    plafond_precedent = Decimal("0")
    for i, tranche in enumerate(tranches, start=1):
        taux = en_decimal(tranche.taux, f"tranche {i}: taux")
        if not Decimal("0") <= taux <= Decimal("1"):
            raise ConfigurationError(f"Tranche {i}: taux {taux} hors de l'intervalle [0, 1]")

        abattement = None
        if tranche.abattement is not None:
            abattement = en_decimal(tranche.abattement, f"tranche {i}: abattement")
            if abattement < 0:
                raise ConfigurationError(f"Tranche {i}: abattement negatif ({abattement})")

        plafond = None
        if tranche.plafond is None:
            if i != len(tranches):
                raise ConfigurationError(
                    f"Tranche {i}: seule la derniere tranche peut etre non plafonnee"
                )
        else:
            plafond = en_decimal(tranche.plafond, f"tranche {i}: plafond")
            if plafond <= plafond_precedent:
                raise ConfigurationError(
                    f"Tranche {i}: plafond {plafond} non strictement superieur "
                    f"au precedent ({plafond_precedent})"
                )
            plafond_precedent = plafond

        normalisees.append(TrancheImposition(plafond=plafond, taux=taux, abattement=abattement))

    if normalisees[-1].plafond is not None:
        raise ConfigurationError("Le bareme doit se terminer par une tranche non plafonnee")

    return tuple(normalisees)


_ADAPTATEUR_BAREME = TypeAdapter(list[TrancheImposition])


def charger_bareme(chemin: str | Path) -> tuple[TrancheImposition, ...]:
    """Charge et valide un bareme IRPP depuis un fichier YAML.

    Format attendu: une liste de tranches, ex:

        - plafond: "2000000"
          taux: "0"
        - plafond: null
          taux: "0.40"

    Raises:
        FileNotFoundError: Si le fichier n'existe pas.
        ConfigurationError: Si le contenu n'est pas un bareme valide.
    """
    path = Path(chemin)
    if not path.exists():
        raise FileNotFoundError(f"Fichier de bareme introuvable: {chemin}")

    try:
        raw = yaml.safe_load(path.read_text(encoding="utf-8"))
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Bareme invalide dans {chemin}: YAML illisible ({e})") from e
    if not isinstance(raw, list):
        raise ConfigurationError(f"Bareme invalide dans {chemin}: une liste de tranches est attendue")
    try:
        tranches = _ADAPTATEUR_BAREME.validate_python(raw)
    except PydanticValidationError as e:
        raise ConfigurationError(f"Bareme invalide dans {chemin}: {e}") from e

    logger.debug("Bareme charge depuis %s (%d tranches)", chemin, len(tranches))
    return valider_bareme(tranches)
