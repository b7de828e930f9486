"""Agregation du journal: soldes par compte, bilan et statistiques.

Les soldes sont recalcules entierement a partir des ecritures a chaque
appel (aucun etat incremental). La convention de signe est debit - credit
pour tous les comptes: un compte de produits presente donc un solde negatif.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Iterable

from proga.erreurs import ValidationError
from proga.grand_livre.modeles import (
    EcritureComptable,
    SectionBilan,
    SoldeCompte,
    StatistiquesGrandLivre,
)

# Libelles par prefixe de deux chiffres du plan comptable
LIBELLES_COMPTES: dict[str, str] = {
    "10": "Capital",
    "12": "Resultat net",
    "20": "Immobilisations",
    "30": "Stocks",
    "40": "Clients",
    "41": "Fournisseurs",
    "50": "Tresorerie",
    "60": "Charges",
    "70": "Produits",
}

# Categorie par premier chiffre du code de compte
CATEGORIES_COMPTES: dict[str, str] = {
    "1": "capitaux",
    "2": "capitaux",
    "3": "actifs",
    "4": "actifs",
    "5": "actifs",
    "6": "charges",
    "7": "produits",
}

# Sections du bilan, dans l'ordre d'affichage
SECTIONS_BILAN: tuple[tuple[str, str], ...] = (
    ("actifs", "Actif"),
    ("capitaux", "Passif / Capitaux"),
    ("produits", "Produits"),
    ("charges", "Charges"),
)


def libelle_compte(compte: str) -> str:
    """Libelle du compte selon ses deux premiers chiffres, "" si inconnu."""
    return LIBELLES_COMPTES.get(compte[:2], "")


def categoriser_compte(compte: str) -> str:
    """Categorie du compte selon son premier chiffre.

    Returns:
        'capitaux', 'actifs', 'charges', 'produits', ou 'autres' pour
        tout autre code (exclu des sections du bilan).
    """
    return CATEGORIES_COMPTES.get(compte[:1], "autres")


def valider_ecriture(ecriture: EcritureComptable) -> None:
    """Verifie la validite metier d'une ecriture avant son ajout au journal.

    Raises:
        ValidationError: Montant non fini ou non positif, ou code de compte vide.
    """
    if not ecriture.montant.is_finite():
        raise ValidationError(f"Ecriture {ecriture.id}: montant non fini ({ecriture.montant})")
    if ecriture.montant <= 0:
        raise ValidationError(
            f"Ecriture {ecriture.id}: le montant doit etre positif ({ecriture.montant})"
        )
    if not ecriture.compte_debit.strip():
        raise ValidationError(f"Ecriture {ecriture.id}: compte de debit vide")
    if not ecriture.compte_credit.strip():
        raise ValidationError(f"Ecriture {ecriture.id}: compte de credit vide")


def calculer_soldes(ecritures: Iterable[EcritureComptable]) -> list[SoldeCompte]:
    """Calcule debit, credit et solde de chaque compte mouvemente.

    Le resultat ne depend pas de l'ordre des ecritures. Aucune validation des
    montants n'est faite ici (voir valider_ecriture).

    Returns:
        Liste de SoldeCompte triee par code de compte.
    """
    totaux: dict[str, list[Decimal]] = {}
    for ecriture in ecritures:
        for compte in (ecriture.compte_debit, ecriture.compte_credit):
            if compte not in totaux:
                totaux[compte] = [Decimal("0"), Decimal("0")]
        totaux[ecriture.compte_debit][0] += ecriture.montant
        totaux[ecriture.compte_credit][1] += ecriture.montant

    return [
        SoldeCompte(
            compte=compte,
            libelle=libelle_compte(compte),
            debit=debit,
            credit=credit,
            solde=debit - credit,
        )
        for compte, (debit, credit) in sorted(totaux.items())
    ]


def generer_bilan(soldes: Iterable[SoldeCompte]) -> list[SectionBilan]:
    """Regroupe les soldes en quatre sections: Actif, Passif / Capitaux, Produits, Charges.

    Le total d'une section est la somme signee des soldes de ses comptes.
    Les comptes de categorie 'autres' n'apparaissent dans aucune section.
    """
    soldes = list(soldes)
    sections = []
    for categorie, titre in SECTIONS_BILAN:
        comptes = tuple(s for s in soldes if categoriser_compte(s.compte) == categorie)
        sections.append(
            SectionBilan(
                titre=titre,
                comptes=comptes,
                total=sum((s.solde for s in comptes), Decimal("0")),
            )
        )
    return sections


def calculer_statistiques(soldes: Iterable[SoldeCompte]) -> StatistiquesGrandLivre:
    """Totaux des debits et credits; l'ecart est nul pour un journal equilibre."""
    soldes = list(soldes)
    total_debit = sum((s.debit for s in soldes), Decimal("0"))
    total_credit = sum((s.credit for s in soldes), Decimal("0"))
    return StatistiquesGrandLivre(
        total_debit=total_debit,
        total_credit=total_credit,
        ecart=total_debit - total_credit,
    )
