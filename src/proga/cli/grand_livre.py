"""Sous-commandes du grand livre (journal, soldes, bilan)."""

from __future__ import annotations

import datetime
from typing import List, Optional

import typer
from rich.console import Console
from rich.table import Table

from proga.erreurs import ProgaError
from proga.grand_livre.journal import Journal
from proga.montants import formater_montant

journal_app = typer.Typer(no_args_is_help=True)
console = Console()


def _ouvrir() -> Journal:
    from proga.cli.app import ouvrir_journal

    try:
        return ouvrir_journal()
    except (ProgaError, ValueError) as e:
        console.print(f"[red]Erreur:[/red] {e}")
        raise typer.Exit(1)


@journal_app.command(name="ajouter")
def ajouter(
    debit: str = typer.Option(..., "--debit", "-d", help="Compte debite (ex: 512)"),
    credit: str = typer.Option(..., "--credit", "-c", help="Compte credite (ex: 701)"),
    montant: str = typer.Option(..., "--montant", "-m", help="Montant de l'ecriture"),
    description: str = typer.Option("", "--description", help="Libelle de l'ecriture"),
    date: Optional[str] = typer.Option(None, "--date", help="Date (AAAA-MM-JJ), aujourd'hui par defaut"),
    reference: Optional[str] = typer.Option(None, "--reference", help="Piece justificative"),
    tag: Optional[List[str]] = typer.Option(None, "--tag", "-t", help="Etiquette (repetable)"),
) -> None:
    """Ajouter une ecriture en partie double au journal."""
    journal = _ouvrir()
    try:
        date_ecriture = datetime.date.fromisoformat(date) if date else datetime.date.today()
        ecriture = journal.ajouter(
            date=date_ecriture,
            description=description,
            compte_debit=debit,
            compte_credit=credit,
            montant=montant,
            reference=reference,
            tags=tag or (),
        )
    except (ProgaError, ValueError) as e:
        console.print(f"[red]Erreur:[/red] {e}")
        raise typer.Exit(1)

    console.print(
        f"[green]Ecriture ajoutee[/green] {ecriture.id} : "
        f"{ecriture.compte_debit} / {ecriture.compte_credit} {formater_montant(ecriture.montant)}"
    )


@journal_app.command(name="lister")
def lister() -> None:
    """Lister les ecritures du journal."""
    journal = _ouvrir()
    ecritures = sorted(journal.ecritures, key=lambda e: e.date)
    if not ecritures:
        console.print("[yellow]Aucune ecriture dans le journal.[/yellow]")
        return

    tableau = Table(title=f"Journal - {journal.espace}", show_header=True)
    tableau.add_column("Date", style="dim")
    tableau.add_column("Debit", style="cyan")
    tableau.add_column("Credit", style="cyan")
    tableau.add_column("Montant", justify="right")
    tableau.add_column("Description")
    tableau.add_column("Id", style="dim", overflow="fold")

    for ecriture in ecritures:
        tableau.add_row(
            str(ecriture.date),
            ecriture.compte_debit,
            ecriture.compte_credit,
            formater_montant(ecriture.montant),
            ecriture.description,
            ecriture.id,
        )
    console.print(tableau)


@journal_app.command(name="supprimer")
def supprimer(
    id_ecriture: str = typer.Argument(..., help="Identifiant de l'ecriture"),
) -> None:
    """Supprimer definitivement une ecriture."""
    journal = _ouvrir()
    if not journal.supprimer(id_ecriture):
        console.print(f"[red]Erreur:[/red] Ecriture introuvable : {id_ecriture}")
        raise typer.Exit(1)
    console.print(f"[green]Ecriture supprimee[/green] {id_ecriture}")


@journal_app.command(name="vider")
def vider(
    oui: bool = typer.Option(False, "--oui", help="Confirmer la suppression de toutes les ecritures"),
) -> None:
    """Supprimer toutes les ecritures de l'espace courant."""
    if not oui:
        console.print("[yellow]Ajoutez --oui pour confirmer la remise a zero du journal.[/yellow]")
        raise typer.Exit(1)
    journal = _ouvrir()
    journal.vider()
    console.print(f"[green]Journal {journal.espace} vide.[/green]")


def soldes() -> None:
    """Afficher debit, credit et solde de chaque compte mouvemente."""
    journal = _ouvrir()
    soldes_comptes = journal.soldes()
    if not soldes_comptes:
        console.print("[yellow]Aucune ecriture dans le journal.[/yellow]")
        return

    tableau = Table(title="Soldes des comptes", show_header=True)
    tableau.add_column("Compte", style="cyan")
    tableau.add_column("Libelle")
    tableau.add_column("Debit", justify="right", style="green")
    tableau.add_column("Credit", justify="right", style="red")
    tableau.add_column("Solde", justify="right")

    for solde in soldes_comptes:
        style = "green" if solde.solde >= 0 else "red"
        tableau.add_row(
            solde.compte,
            solde.libelle,
            formater_montant(solde.debit),
            formater_montant(solde.credit),
            f"[{style}]{formater_montant(solde.solde)}[/{style}]",
        )

    stats = journal.statistiques()
    tableau.add_section()
    tableau.add_row(
        "[bold]TOTAL[/bold]",
        "",
        f"[bold]{formater_montant(stats.total_debit)}[/bold]",
        f"[bold]{formater_montant(stats.total_credit)}[/bold]",
        "",
    )
    console.print(tableau)

    if stats.ecart:
        console.print(
            f"\n[red]AVERTISSEMENT : Le journal ne balance pas ! "
            f"Ecart : {formater_montant(stats.ecart)}[/red]"
        )
    else:
        console.print("\n[green]Journal equilibre.[/green]")


def bilan() -> None:
    """Afficher le bilan par section: Actif, Passif / Capitaux, Produits, Charges.

    Les totaux sont des sommes signees (debit - credit): les comptes de
    produits et de capitaux apparaissent donc en negatif.
    """
    journal = _ouvrir()
    sections = journal.bilan()
    if not any(section.comptes for section in sections):
        console.print("[yellow]Aucune donnee pour generer le bilan.[/yellow]")
        return

    tableau = Table(title="Bilan", show_header=True)
    tableau.add_column("Poste", style="cyan", min_width=30)
    tableau.add_column("Solde", justify="right")

    for section in sections:
        tableau.add_row(f"[bold]{section.titre.upper()}[/bold]", "")
        for solde in section.comptes:
            nom = f"{solde.compte} {solde.libelle}".strip()
            tableau.add_row(f"  {nom}", formater_montant(solde.solde))
        tableau.add_row(
            f"[bold]Total {section.titre}[/bold]",
            f"[bold]{formater_montant(section.total)}[/bold]",
        )
        tableau.add_section()

    console.print(tableau)
