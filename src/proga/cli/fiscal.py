"""Sous-commandes de simulation fiscale.

Usage:
    proga fiscal simuler bases.yaml
    proga fiscal simuler bases.yaml --bareme bareme.yaml
    proga fiscal irpp --salaires 6000000 --situation marie --enfants 2
    proga fiscal facture facture.yaml
"""

from __future__ import annotations

from pathlib import Path
from typing import NoReturn, Optional

import typer
from rich.console import Console
from rich.table import Table

from proga.erreurs import ProgaError
from proga.factures.modeles import calculer_totaux_facture, charger_lignes
from proga.fiscal.bases import ResultatsFiscaux, charger_bases, evaluer_bases_fiscales
from proga.fiscal.foyer import RevenusFoyer, SituationFamiliale, simuler_irpp
from proga.fiscal.taux import BAREME_IRPP_DEFAUT, charger_bareme
from proga.montants import en_decimal, formater_montant

fiscal_app = typer.Typer(no_args_is_help=True)
console = Console()


def _erreur(message: str) -> NoReturn:
    console.print(f"[red]Erreur:[/red] {message}")
    raise typer.Exit(1)


def _tableau_resultats(resultats: ResultatsFiscaux) -> Table:
    tableau = Table(title="Simulation fiscale", show_header=True)
    tableau.add_column("Impot", style="cyan")
    tableau.add_column("Montant du", justify="right", style="green")
    tableau.add_column("Detail")

    if resultats.tva is not None:
        tva = resultats.tva
        detail = f"Credit {formater_montant(tva.credit)}" if tva.credit else f"Net {formater_montant(tva.net)}"
        tableau.add_row("TVA", formater_montant(tva.montant), detail)

    if resultats.css is not None:
        css = resultats.css
        tableau.add_row(
            "CSS",
            formater_montant(css.montant),
            f"Assiette {formater_montant(css.imposable)} x {css.taux:%}",
        )

    if resultats.is_vs_imf is not None:
        comparaison = resultats.is_vs_imf
        tableau.add_row(
            "IS / IMF",
            formater_montant(comparaison.montant),
            f"{comparaison.applique.upper()} retenu "
            f"(IS {formater_montant(comparaison.montant_is)}, "
            f"IMF {formater_montant(comparaison.montant_imf)})",
        )

    if resultats.irpp is not None:
        irpp = resultats.irpp
        tableau.add_row(
            "IRPP",
            formater_montant(irpp.montant),
            f"{irpp.parts} part(s), {formater_montant(irpp.base_par_part)} par part",
        )

    tableau.add_section()
    tableau.add_row("[bold]TOTAL[/bold]", f"[bold]{formater_montant(resultats.total_du())}[/bold]", "")
    return tableau


@fiscal_app.command(name="simuler")
def simuler(
    fichier: str = typer.Argument(..., help="Fichier YAML des bases fiscales"),
    bareme: Optional[str] = typer.Option(
        None, "--bareme", "-b", help="Fichier YAML d'un bareme IRPP personnalise",
    ),
) -> None:
    """Evaluer les impots dus a partir d'un fichier de bases fiscales."""
    try:
        bases = charger_bases(Path(fichier))
        if bareme and bases.irpp is not None:
            tranches = charger_bareme(Path(bareme))
            bases.irpp = bases.irpp.model_copy(update={"tranches": list(tranches)})
        resultats = evaluer_bases_fiscales(bases)
    except (FileNotFoundError, ProgaError) as e:
        _erreur(str(e))

    if all(
        r is None
        for r in (resultats.tva, resultats.css, resultats.is_vs_imf, resultats.irpp)
    ):
        console.print("[yellow]Aucune base fiscale renseignee.[/yellow]")
        return

    console.print(_tableau_resultats(resultats))


@fiscal_app.command(name="irpp")
def irpp(
    salaires: str = typer.Option("0", "--salaires", help="Salaires annuels"),
    loyers: str = typer.Option("0", "--loyers", help="Revenus fonciers"),
    bic: str = typer.Option("0", "--bic", help="Benefices industriels et commerciaux"),
    bnc: str = typer.Option("0", "--bnc", help="Benefices non commerciaux"),
    dividendes: str = typer.Option("0", "--dividendes", help="Dividendes"),
    deductions: str = typer.Option("0", "--deductions", help="Charges deductibles"),
    situation: SituationFamiliale = typer.Option(
        SituationFamiliale.CELIBATAIRE, "--situation", "-s", help="Situation familiale",
    ),
    enfants: int = typer.Option(0, "--enfants", min=0, help="Nombre de personnes a charge"),
    bareme: Optional[str] = typer.Option(
        None, "--bareme", "-b", help="Fichier YAML d'un bareme IRPP personnalise",
    ),
) -> None:
    """Simuler l'IRPP d'un foyer (quotient familial et taux effectif)."""
    try:
        revenus = RevenusFoyer(
            salaires=en_decimal(salaires, "salaires"),
            loyers=en_decimal(loyers, "loyers"),
            bic=en_decimal(bic, "bic"),
            bnc=en_decimal(bnc, "bnc"),
            dividendes=en_decimal(dividendes, "dividendes"),
            deductions=en_decimal(deductions, "deductions"),
            situation=situation,
            personnes_a_charge=enfants,
        )
        tranches = charger_bareme(Path(bareme)) if bareme else BAREME_IRPP_DEFAUT
        simulation = simuler_irpp(revenus, tranches)
    except (FileNotFoundError, ValueError) as e:
        _erreur(str(e))

    tableau = Table(title="Simulation IRPP", show_header=True)
    tableau.add_column("Poste", style="cyan")
    tableau.add_column("Valeur", justify="right")
    tableau.add_row("Revenu total", formater_montant(simulation.revenu_total))
    tableau.add_row("Base imposable", formater_montant(simulation.base_imposable))
    tableau.add_row("Parts", str(simulation.parts))
    tableau.add_row("Base par part", formater_montant(simulation.base_par_part))
    tableau.add_row("[bold]Impot[/bold]", f"[bold]{formater_montant(simulation.impot)}[/bold]")
    tableau.add_row("Taux effectif", f"{simulation.taux_effectif:.1%}")
    console.print(tableau)


@fiscal_app.command(name="facture")
def facture(
    fichier: str = typer.Argument(..., help="Fichier YAML des lignes de facture"),
) -> None:
    """Calculer les totaux HT, TVA et TTC d'une facture."""
    try:
        totaux = calculer_totaux_facture(charger_lignes(Path(fichier)))
    except (FileNotFoundError, ProgaError) as e:
        _erreur(str(e))

    tableau = Table(title="Totaux de la facture", show_header=True)
    tableau.add_column("Total", style="cyan")
    tableau.add_column("Montant", justify="right")
    tableau.add_row("HT", formater_montant(totaux.ht))
    tableau.add_row("TVA", formater_montant(totaux.tva))
    tableau.add_row("[bold]TTC[/bold]", f"[bold]{formater_montant(totaux.ttc)}[/bold]")
    console.print(tableau)
