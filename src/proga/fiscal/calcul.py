"""Calcul des impots et taxes: TVA, CSS, IS vs IMF et IRPP.

Fonctions pures: aucune E/S, aucune mutation des entrees. Toute
l'arithmetique utilise Decimal, sans arrondi (l'arrondi au cent se fait a
l'affichage). Une entree non finie (NaN, Infinity) leve ValidationError.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Iterable, Literal

from proga.fiscal.taux import (
    BAREME_IRPP_DEFAUT,
    TAUX_CSS_DEFAUT,
    TAUX_IMF,
    TAUX_IS_DEFAUT,
    TrancheImposition,
    valider_bareme,
)
from proga.montants import Nombre, en_decimal

ZERO = Decimal("0")
INFINI = Decimal("Infinity")


@dataclass(frozen=True)
class ResultatCalcul:
    """Resultat commun: montant du et valeurs d'entree retenues."""

    montant: Decimal
    details: dict[str, Decimal]


@dataclass(frozen=True)
class ResultatTVA(ResultatCalcul):
    """TVA nette: due si collectee > deductible, credit sinon."""

    net: Decimal
    du: Decimal
    credit: Decimal


@dataclass(frozen=True)
class ResultatCSS(ResultatCalcul):
    imposable: Decimal
    taux: Decimal


@dataclass(frozen=True)
class ResultatISvsIMF(ResultatCalcul):
    """Comparaison IS / IMF: le plus eleve des deux est retenu."""

    montant_is: Decimal
    montant_imf: Decimal
    applique: Literal["is", "imf"]


@dataclass(frozen=True)
class ResultatIRPP(ResultatCalcul):
    parts: Decimal
    base_par_part: Decimal


def calculer_tva(collectee: Nombre, deductible: Nombre) -> ResultatTVA:
    """Calcule la position nette de TVA.

    net = collectee - deductible; du = max(net, 0); credit = max(-net, 0).
    Au plus un des deux (du, credit) est non nul. Les montants negatifs sont
    acceptes tels quels.
    """
    collectee = en_decimal(collectee, "collectee")
    deductible = en_decimal(deductible, "deductible")

    net = collectee - deductible
    du = max(net, ZERO)
    credit = max(-net, ZERO)
    return ResultatTVA(
        montant=du,
        details={"collectee": collectee, "deductible": deductible},
        net=net,
        du=du,
        credit=credit,
    )


def calculer_css(
    base: Nombre,
    exclusions: Nombre = 0,
    taux: Nombre = TAUX_CSS_DEFAUT,
) -> ResultatCSS:
    """Calcule la contribution CSS: taux forfaitaire sur la base nette d'exclusions.

    Des exclusions superieures a la base ramenent l'assiette a zero.
    """
    base = en_decimal(base, "base")
    exclusions = en_decimal(exclusions, "exclusions")
    taux = en_decimal(taux, "taux")

    imposable = max(base - exclusions, ZERO)
    return ResultatCSS(
        montant=imposable * taux,
        details={"base": base, "exclusions": exclusions},
        imposable=imposable,
        taux=taux,
    )


def calculer_is_vs_imf(
    resultat: Nombre,
    chiffre_affaires: Nombre,
    taux_is: Nombre = TAUX_IS_DEFAUT,
) -> ResultatISvsIMF:
    """Compare l'impot sur les societes a l'impot minimum forfaitaire.

    montant_is = max(resultat, 0) * taux_is
    montant_imf = max(chiffre_affaires, 0) * 1.5%

    Le contribuable doit le plus eleve des deux; en cas d'egalite, l'IS
    est retenu.
    """
    resultat = en_decimal(resultat, "resultat")
    chiffre_affaires = en_decimal(chiffre_affaires, "chiffre_affaires")
    taux_is = en_decimal(taux_is, "taux_is")

    montant_is = max(resultat, ZERO) * taux_is
    montant_imf = max(chiffre_affaires, ZERO) * TAUX_IMF
    applique: Literal["is", "imf"] = "is" if montant_is >= montant_imf else "imf"
    return ResultatISvsIMF(
        montant=montant_is if applique == "is" else montant_imf,
        details={
            "resultat": resultat,
            "chiffre_affaires": chiffre_affaires,
            "taux_is": taux_is,
            "taux_imf": TAUX_IMF,
        },
        montant_is=montant_is,
        montant_imf=montant_imf,
        applique=applique,
    )


def calculer_irpp(
    base: Nombre,
    quotient: Nombre = 1,
    tranches: Iterable[TrancheImposition] = BAREME_IRPP_DEFAUT,
) -> ResultatIRPP:
    """Calcule l'IRPP par quotient familial sur un bareme progressif.

    1. parts = max(1, quotient)
    2. base_par_part = max(base, 0) / parts
    3. Integration progressive tranche par tranche a partir de 0: chaque
       portion est taxee a son taux; l'abattement forfaitaire d'une tranche
       est retranche une fois des que la portion est positive.
    4. montant = impot_par_part * parts

    Raises:
        ConfigurationError: Si le bareme est incoherent.
        ValidationError: Si une entree n'est pas un nombre fini.
    """
    base = en_decimal(base, "base")
    quotient = en_decimal(quotient, "quotient")
    bareme = valider_bareme(tranches)

    parts = max(Decimal("1"), quotient)
    base_par_part = max(base, ZERO) / parts

    impot_par_part = ZERO
    plafond_precedent = ZERO
    for tranche in bareme:
        plafond = tranche.plafond if tranche.plafond is not None else INFINI
        if base_par_part <= plafond_precedent:
            break
        portion = min(base_par_part, plafond) - plafond_precedent
        if portion > 0:
            impot_par_part += portion * tranche.taux
            if tranche.abattement:
                impot_par_part -= tranche.abattement
        plafond_precedent = plafond

    return ResultatIRPP(
        montant=impot_par_part * parts,
        details={"base": base, "quotient": parts},
        parts=parts,
        base_par_part=base_par_part,
    )
