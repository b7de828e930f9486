"""Tests pour l'agregation du grand livre: soldes, libelles, categories et bilan."""

from __future__ import annotations

import datetime
import itertools
from decimal import Decimal

import pytest
from pydantic import ValidationError as PydanticValidationError

from proga.erreurs import ValidationError
from proga.grand_livre.modeles import EcritureComptable
from proga.grand_livre.soldes import (
    calculer_soldes,
    calculer_statistiques,
    categoriser_compte,
    generer_bilan,
    libelle_compte,
    valider_ecriture,
)

# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

_compteur = itertools.count(1)


def _ecriture(debit: str, credit: str, montant: str, **kwargs) -> EcritureComptable:
    """Cree une ecriture de test avec des valeurs par defaut."""
    defaults = dict(
        id=f"e{next(_compteur)}",
        espace="test",
        date=datetime.date(2026, 1, 15),
        description="Ecriture de test",
        compte_debit=debit,
        compte_credit=credit,
        montant=Decimal(montant),
    )
    defaults.update(kwargs)
    return EcritureComptable(**defaults)


ECRITURES_EXEMPLE = [
    _ecriture("101", "512", "500000", description="Apport en capital (inverse)"),
    _ecriture("512", "701", "100000", description="Vente comptant"),
    _ecriture("401", "512", "40000", description="Reglement fournisseur"),
    _ecriture("601", "401", "25000", description="Achat marchandises"),
    _ecriture("411", "706", "75000", description="Prestation facturee"),
    _ecriture("218", "512", "30000", description="Materiel"),
    _ecriture("801", "512", "1000", description="Engagement hors bilan"),
]


def _par_compte(soldes):
    return {s.compte: s for s in soldes}


# ---------------------------------------------------------------------------
# Tests: soldes
# ---------------------------------------------------------------------------


class TestCalculerSoldes:
    def test_exemple_banque(self):
        """512 debite de 100 000 puis credite de 40 000 -> solde 60 000."""
        soldes = calculer_soldes(
            [
                _ecriture("512", "701", "100000"),
                _ecriture("401", "512", "40000"),
            ]
        )
        banque = _par_compte(soldes)["512"]
        assert banque.debit == Decimal("100000")
        assert banque.credit == Decimal("40000")
        assert banque.solde == Decimal("60000")

    def test_compte_credite_seulement(self):
        soldes = _par_compte(calculer_soldes([_ecriture("512", "701", "100000")]))
        assert soldes["701"].debit == Decimal("0")
        assert soldes["701"].credit == Decimal("100000")
        assert soldes["701"].solde == Decimal("-100000")

    def test_journal_vide(self):
        assert calculer_soldes([]) == []

    def test_tri_par_code_de_compte(self):
        soldes = calculer_soldes(ECRITURES_EXEMPLE)
        codes = [s.compte for s in soldes]
        assert codes == sorted(codes)
        assert codes[0] == "101"

    def test_tri_lexical(self):
        soldes = calculer_soldes([_ecriture("9", "10", "1"), _ecriture("100", "2", "1")])
        assert [s.compte for s in soldes] == ["10", "100", "2", "9"]

    def test_solde_egale_debit_moins_credit(self):
        for solde in calculer_soldes(ECRITURES_EXEMPLE):
            assert solde.solde == solde.debit - solde.credit

    def test_independant_de_l_ordre(self):
        reference = calculer_soldes(ECRITURES_EXEMPLE)
        for permutation in itertools.islice(itertools.permutations(ECRITURES_EXEMPLE), 0, None, 97):
            assert calculer_soldes(permutation) == reference
        assert calculer_soldes(list(reversed(ECRITURES_EXEMPLE))) == reference

    def test_meme_compte_au_debit_et_au_credit(self):
        soldes = calculer_soldes([_ecriture("512", "512", "100")])
        assert len(soldes) == 1
        assert soldes[0].debit == Decimal("100")
        assert soldes[0].credit == Decimal("100")
        assert soldes[0].solde == Decimal("0")

    def test_montants_non_valides_acceptes(self):
        """L'agregation ne valide pas les montants: une ecriture negative est cumulee."""
        soldes = _par_compte(calculer_soldes([_ecriture("512", "701", "-50")]))
        assert soldes["512"].solde == Decimal("-50")

    def test_libelles(self):
        soldes = _par_compte(calculer_soldes(ECRITURES_EXEMPLE))
        assert soldes["101"].libelle == "Capital"
        assert soldes["401"].libelle == "Clients"
        assert soldes["411"].libelle == "Fournisseurs"
        assert soldes["512"].libelle == ""
        assert soldes["601"].libelle == "Charges"
        assert soldes["701"].libelle == "Produits"
        assert soldes["706"].libelle == "Produits"
        assert soldes["218"].libelle == ""

    def test_resultat_immuable(self):
        solde = calculer_soldes([_ecriture("512", "701", "1")])[0]
        with pytest.raises(AttributeError):
            solde.debit = Decimal("2")


class TestLibelleEtCategorie:
    @pytest.mark.parametrize(
        "compte,libelle",
        [
            ("10", "Capital"),
            ("1013", "Capital"),
            ("120", "Resultat net"),
            ("201", "Immobilisations"),
            ("2154", ""),
            ("301", "Stocks"),
            ("31", ""),
            ("4011", "Clients"),
            ("411", "Fournisseurs"),
            ("501", "Tresorerie"),
            ("5121", ""),
            ("607", "Charges"),
            ("707", "Produits"),
            ("99", ""),
            ("", ""),
        ],
    )
    def test_libelle_compte(self, compte, libelle):
        assert libelle_compte(compte) == libelle

    @pytest.mark.parametrize(
        "compte,categorie",
        [
            ("101", "capitaux"),
            ("218", "capitaux"),
            ("31", "actifs"),
            ("401", "actifs"),
            ("512", "actifs"),
            ("601", "charges"),
            ("701", "produits"),
            ("801", "autres"),
            ("901", "autres"),
            ("0", "autres"),
            ("A12", "autres"),
            ("", "autres"),
        ],
    )
    def test_categoriser_compte(self, compte, categorie):
        assert categoriser_compte(compte) == categorie


# ---------------------------------------------------------------------------
# Tests: bilan
# ---------------------------------------------------------------------------


class TestGenererBilan:
    def test_quatre_sections_ordre_fixe(self):
        sections = generer_bilan(calculer_soldes(ECRITURES_EXEMPLE))
        assert [s.titre for s in sections] == ["Actif", "Passif / Capitaux", "Produits", "Charges"]

    def test_bilan_vide(self):
        sections = generer_bilan([])
        assert len(sections) == 4
        assert all(s.comptes == () and s.total == Decimal("0") for s in sections)

    def test_comptes_par_section(self):
        sections = {s.titre: s for s in generer_bilan(calculer_soldes(ECRITURES_EXEMPLE))}
        assert [c.compte for c in sections["Actif"].comptes] == ["401", "411", "512"]
        assert [c.compte for c in sections["Passif / Capitaux"].comptes] == ["101", "218"]
        assert [c.compte for c in sections["Produits"].comptes] == ["701", "706"]
        assert [c.compte for c in sections["Charges"].comptes] == ["601"]

    def test_totaux_signes(self):
        """Les produits gardent leur solde negatif (debit - credit)."""
        sections = {s.titre: s for s in generer_bilan(calculer_soldes(ECRITURES_EXEMPLE))}
        assert sections["Produits"].total == Decimal("-175000")
        assert sections["Charges"].total == Decimal("25000")
        # 401: 40 000 - 25 000; 411: 75 000; 512: 100 000 - 571 000
        assert sections["Actif"].total == Decimal("15000") + Decimal("75000") + Decimal("-471000")
        assert sections["Passif / Capitaux"].total == Decimal("530000")

    def test_comptes_hors_categories_exclus_des_sections(self):
        """Le compte 801 figure dans les soldes mais dans aucune section."""
        soldes = calculer_soldes(ECRITURES_EXEMPLE)
        sections = generer_bilan(soldes)
        assert "801" in [s.compte for s in soldes]
        assert all("801" not in [c.compte for c in s.comptes] for s in sections)

        total_sections = sum((s.total for s in sections), Decimal("0"))
        total_categorises = sum(
            (s.solde for s in soldes if s.compte[:1] in "1234567" and s.compte), Decimal("0")
        )
        total_tous = sum((s.solde for s in soldes), Decimal("0"))
        assert total_sections == total_categorises
        assert total_tous == Decimal("0")
        assert total_sections == Decimal("-1000")


# ---------------------------------------------------------------------------
# Tests: statistiques et validation
# ---------------------------------------------------------------------------


class TestStatistiques:
    def test_journal_equilibre(self):
        stats = calculer_statistiques(calculer_soldes(ECRITURES_EXEMPLE))
        assert stats.total_debit == Decimal("771000")
        assert stats.total_credit == Decimal("771000")
        assert stats.ecart == Decimal("0")

    def test_statistiques_vides(self):
        stats = calculer_statistiques([])
        assert stats.total_debit == stats.total_credit == stats.ecart == Decimal("0")


class TestValiderEcriture:
    def test_ecriture_valide(self):
        valider_ecriture(_ecriture("512", "701", "100"))

    @pytest.mark.parametrize("montant", ["0", "-100"])
    def test_montant_non_positif(self, montant):
        with pytest.raises(ValidationError, match="positif"):
            valider_ecriture(_ecriture("512", "701", montant))

    def test_montant_non_fini(self):
        ecriture = EcritureComptable.model_construct(
            id="x",
            espace="test",
            date=datetime.date(2026, 1, 1),
            description="",
            compte_debit="512",
            compte_credit="701",
            montant=Decimal("NaN"),
        )
        with pytest.raises(ValidationError, match="non fini"):
            valider_ecriture(ecriture)

    def test_compte_debit_vide(self):
        with pytest.raises(ValidationError, match="debit"):
            valider_ecriture(_ecriture("  ", "701", "100"))

    def test_compte_credit_vide(self):
        with pytest.raises(ValidationError, match="credit"):
            valider_ecriture(_ecriture("512", "", "100"))


class TestEcritureComptable:
    def test_float_refuse(self):
        with pytest.raises(PydanticValidationError):
            EcritureComptable(
                id="x",
                espace="test",
                date=datetime.date(2026, 1, 1),
                compte_debit="512",
                compte_credit="701",
                montant=100.0,
            )

    def test_montant_texte_accepte(self):
        ecriture = EcritureComptable(
            id="x",
            espace="test",
            date=datetime.date(2026, 1, 1),
            compte_debit="512",
            compte_credit="701",
            montant="12.50",
        )
        assert ecriture.montant == Decimal("12.50")

    def test_immuable(self):
        ecriture = _ecriture("512", "701", "1")
        with pytest.raises(PydanticValidationError):
            ecriture.montant = Decimal("2")
