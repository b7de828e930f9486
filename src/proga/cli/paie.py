"""Commandes CLI pour la paie de l'emploi a domicile.

Usage:
    proga paie fiche --taux-horaire 1500 --heures 120
    proga paie fiche --taux-horaire 1500 --heures 120 --primes 10000 --periode 2026-03
"""

from __future__ import annotations

import datetime
from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

from proga.montants import en_decimal, formater_montant
from proga.paie.emploi import ContratEmploi, TypeEmploi, calculer_fiche_paie

paie_app = typer.Typer(no_args_is_help=True)
console = Console()


@paie_app.command(name="fiche")
def fiche(
    taux_horaire: str = typer.Option(..., "--taux-horaire", help="Salaire horaire brut"),
    heures: str = typer.Option(..., "--heures", help="Heures travaillees sur la periode"),
    primes: str = typer.Option("0", "--primes", help="Primes ajoutees au net"),
    periode: Optional[str] = typer.Option(None, "--periode", help="Periode (AAAA-MM), mois courant par defaut"),
    employe: str = typer.Option("Employe", "--employe", help="Nom de l'employe"),
    type_emploi: TypeEmploi = typer.Option(TypeEmploi.AUTRE, "--type", help="Nature de l'emploi"),
) -> None:
    """Calculer la fiche de paie d'un employe a domicile."""
    from proga.cli.app import get_espace

    periode = periode or datetime.date.today().strftime("%Y-%m")
    try:
        contrat = ContratEmploi(
            id="simulation",
            espace=get_espace(),
            employe=employe,
            type_emploi=type_emploi,
            taux_horaire=en_decimal(taux_horaire, "taux_horaire"),
        )
        resultat = calculer_fiche_paie(contrat, periode, heures, primes)
    except ValueError as e:
        console.print(f"[red]Erreur:[/red] {e}")
        raise typer.Exit(1)

    tableau = Table(title=f"Fiche de paie - {employe} ({periode})", show_header=True)
    tableau.add_column("Poste", style="cyan")
    tableau.add_column("Montant", justify="right")
    tableau.add_row("Heures", str(resultat.heures))
    tableau.add_row("Salaire brut", formater_montant(resultat.brut))
    tableau.add_row("Cotisations employe (8%)", formater_montant(resultat.cotisations_employe))
    tableau.add_row("Primes", formater_montant(resultat.primes))
    tableau.add_row("[bold]Net a payer[/bold]", f"[bold]{formater_montant(resultat.net)}[/bold]")
    tableau.add_section()
    tableau.add_row("Cotisations employeur (18%)", formater_montant(resultat.cotisations_employeur))
    console.print(tableau)
