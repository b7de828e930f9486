"""Tests pour les bases fiscales et l'orchestration evaluer_bases_fiscales."""

from __future__ import annotations

from decimal import Decimal

import pytest

from proga.erreurs import ConfigurationError, ValidationError
from proga.fiscal.bases import (
    BaseImposition,
    BasesFiscales,
    BaseTVA,
    ResultatsFiscaux,
    charger_bases,
    evaluer_bases_fiscales,
    valider_bases,
)


class TestEvaluerBasesFiscales:
    """Tests de l'orchestration: chaque impot n'est calcule que si sa base est presente."""

    def test_bases_vides_tout_a_none(self):
        resultats = evaluer_bases_fiscales(BasesFiscales())
        assert resultats == ResultatsFiscaux(tva=None, css=None, is_vs_imf=None, irpp=None)
        assert resultats.total_du() == Decimal("0")

    def test_tva_seule(self):
        resultats = evaluer_bases_fiscales(
            BasesFiscales(tva=BaseTVA(collectee=Decimal("1000000"), deductible=Decimal("300000")))
        )
        assert resultats.tva is not None
        assert resultats.tva.du == Decimal("700000")
        assert resultats.css is None
        assert resultats.is_vs_imf is None
        assert resultats.irpp is None

    def test_base_a_zero_distincte_de_base_absente(self):
        resultats = evaluer_bases_fiscales({"css": {"base": "0"}})
        assert resultats.css is not None
        assert resultats.css.montant == Decimal("0")
        assert resultats.tva is None

    def test_css_defauts(self):
        resultats = evaluer_bases_fiscales({"css": {"base": "5000000", "exclusions": "500000"}})
        assert resultats.css.montant == Decimal("144000")
        assert resultats.css.taux == Decimal("0.032")

    def test_css_taux_personnalise(self):
        resultats = evaluer_bases_fiscales({"css": {"base": "1000", "taux": "0.1"}})
        assert resultats.css.montant == Decimal("100")

    def test_is_et_imf(self):
        resultats = evaluer_bases_fiscales(
            {"is": {"base": "1000000"}, "imf": {"base": "100000000"}}
        )
        # IS 250 000 vs IMF 1 500 000
        assert resultats.is_vs_imf.applique == "imf"
        assert resultats.is_vs_imf.montant == Decimal("1500000")

    def test_imf_retombe_sur_la_base_is(self):
        """Sans base IMF, le chiffre d'affaires reprend la base IS."""
        resultats = evaluer_bases_fiscales({"is": {"base": "1000000"}})
        assert resultats.is_vs_imf.details["chiffre_affaires"] == Decimal("1000000")
        assert resultats.is_vs_imf.montant_imf == Decimal("15000")
        assert resultats.is_vs_imf.montant_is == Decimal("250000")

    def test_imf_seul(self):
        resultats = evaluer_bases_fiscales({"imf": {"base": "20000000"}})
        assert resultats.is_vs_imf.montant_is == Decimal("0")
        assert resultats.is_vs_imf.montant_imf == Decimal("300000")
        assert resultats.is_vs_imf.applique == "imf"

    def test_taux_is_de_la_base_is(self):
        resultats = evaluer_bases_fiscales({"is": {"base": "1000000", "taux": "0.30"}})
        assert resultats.is_vs_imf.montant_is == Decimal("300000")

    def test_taux_imf_de_la_base_ignore(self):
        """Le taux IMF est fixe: celui fourni dans la base n'est pas utilise."""
        resultats = evaluer_bases_fiscales({"imf": {"base": "1000000", "taux": "0.5"}})
        assert resultats.is_vs_imf.montant_imf == Decimal("15000")

    def test_alias_is_et_nom_de_champ(self):
        par_alias = BasesFiscales.model_validate({"is": {"base": "10"}})
        par_nom = BasesFiscales(is_=BaseImposition(base=Decimal("10")))
        assert par_alias.is_ == par_nom.is_

    def test_irpp_bareme_defaut(self):
        resultats = evaluer_bases_fiscales({"irpp": {"base": "6000000", "quotient": "1"}})
        assert resultats.irpp.montant == Decimal("500000")

    def test_irpp_bareme_personnalise(self):
        resultats = evaluer_bases_fiscales(
            {
                "irpp": {
                    "base": "2000",
                    "quotient": "1",
                    "tranches": [
                        {"plafond": "1000", "taux": "0"},
                        {"plafond": None, "taux": "0.5"},
                    ],
                }
            }
        )
        assert resultats.irpp.montant == Decimal("500")

    def test_irpp_bareme_personnalise_incoherent(self):
        bases = {
            "irpp": {
                "base": "2000",
                "quotient": "1",
                "tranches": [{"plafond": "1000", "taux": "0"}],
            }
        }
        with pytest.raises(ConfigurationError):
            evaluer_bases_fiscales(bases)

    def test_total_du(self):
        resultats = evaluer_bases_fiscales(
            {
                "tva": {"collectee": "1000000", "deductible": "300000"},
                "css": {"base": "5000000", "exclusions": "500000"},
                "irpp": {"base": "6000000", "quotient": "1"},
            }
        )
        assert resultats.total_du() == Decimal("1344000")

    def test_structure_invalide(self):
        with pytest.raises(ValidationError):
            evaluer_bases_fiscales({"tva": {"collectee": "abc", "deductible": "0"}})

    def test_entrees_non_mutees(self):
        bases = BasesFiscales(tva=BaseTVA(collectee=Decimal("10"), deductible=Decimal("20")))
        copie = bases.model_copy(deep=True)
        evaluer_bases_fiscales(bases)
        assert bases == copie


class TestChargerBases:
    """Tests pour charger_bases depuis un fichier YAML."""

    def test_charger_bases(self, tmp_path):
        fichier = tmp_path / "bases.yaml"
        fichier.write_text(
            "tva:\n"
            "  collectee: 1000000\n"
            "  deductible: 300000\n"
            "is:\n"
            "  base: 4000000\n"
            "irpp:\n"
            "  base: 6000000\n"
            "  quotient: 2\n",
            encoding="utf-8",
        )
        bases = charger_bases(fichier)
        assert bases.tva.collectee == Decimal("1000000")
        assert bases.is_.base == Decimal("4000000")
        assert bases.css is None
        assert bases.irpp.quotient == Decimal("2")

    def test_fichier_vide(self, tmp_path):
        fichier = tmp_path / "bases.yaml"
        fichier.write_text("", encoding="utf-8")
        assert charger_bases(fichier) == BasesFiscales()

    def test_fichier_introuvable(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            charger_bases(tmp_path / "absent.yaml")

    def test_fichier_invalide(self, tmp_path):
        fichier = tmp_path / "bases.yaml"
        fichier.write_text("tva:\n  collectee: 100\n", encoding="utf-8")
        with pytest.raises(ValidationError, match="Bases fiscales invalides"):
            charger_bases(fichier)

    def test_valider_bases_none(self):
        assert valider_bases(None) == BasesFiscales()

    def test_yaml_illisible(self, tmp_path):
        fichier = tmp_path / "bases.yaml"
        fichier.write_text("tva: [1, 2\n", encoding="utf-8")
        with pytest.raises(ValidationError, match="YAML illisible"):
            charger_bases(fichier)
