"""Conversion et formatage des montants.

Toute l'arithmetique du moteur utilise Decimal. Les float sont acceptes en
entree mais convertis via str() pour eviter les artefacts binaires
(0.1 -> Decimal("0.1")).
"""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation, getcontext

from proga.erreurs import ValidationError

DEUX_DECIMALES = Decimal("0.01")

Nombre = Decimal | int | float | str


def en_decimal(valeur: Nombre, nom: str = "montant") -> Decimal:
    """Convertit une valeur numerique en Decimal fini.

    Args:
        valeur: Decimal, int, float ou str.
        nom: Nom du parametre, repris dans le message d'erreur.

    Returns:
        La valeur en Decimal.

    Raises:
        ValidationError: Si la valeur n'est pas numerique ou n'est pas finie
            (NaN, Infinity).
    """
    if isinstance(valeur, bool):
        raise ValidationError(f"{nom}: booleen refuse, un nombre est attendu")
    if isinstance(valeur, Decimal):
        montant = valeur
    elif isinstance(valeur, float):
        montant = Decimal(str(valeur))
    elif isinstance(valeur, (int, str)):
        try:
            montant = Decimal(valeur)
        except InvalidOperation as e:
            raise ValidationError(f"{nom}: valeur non numerique {valeur!r}") from e
    else:
        raise ValidationError(f"{nom}: type non supporte {type(valeur).__name__}")

    if not montant.is_finite():
        raise ValidationError(f"{nom}: valeur non finie ({montant})")
    return montant


def arrondir(montant: Decimal) -> Decimal:
    """Arrondit au cent pres (ROUND_HALF_UP)."""
    return montant.quantize(DEUX_DECIMALES, rounding=ROUND_HALF_UP)


def formater_montant(montant: Decimal) -> str:
    """Formate un montant avec 2 decimales et separateur de milliers.

    Au-dela de la precision du contexte (28 chiffres), quantize echoue: le
    montant est alors formate sans arrondi prealable.
    """
    if montant.adjusted() + 3 <= getcontext().prec:
        montant = arrondir(montant)
    return f"{montant:,.2f}"
