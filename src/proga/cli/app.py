"""Application CLI principale Proga."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

import typer
from dotenv import load_dotenv
from rich.console import Console

import proga
from proga.grand_livre.journal import DepotYaml, Journal

load_dotenv()

app = typer.Typer(
    name="proga",
    help="Proga - Simulation fiscale (TVA, CSS, IS/IMF, IRPP), grand livre et paie",
    no_args_is_help=True,
)

console = Console()

# Options globales stockees via le callback
_journal_path: Path = Path("donnees/journal.yaml")
_espace: str = "defaut"


def get_journal_path() -> Path:
    """Retourne le chemin du fichier YAML du journal."""
    return _journal_path


def get_espace() -> str:
    """Retourne l'identifiant de l'espace de travail courant."""
    return _espace


def ouvrir_journal() -> Journal:
    """Ouvre le journal de l'espace courant sur le depot YAML configure."""
    return Journal(DepotYaml(get_journal_path()), get_espace())


def _version_callback(value: bool) -> None:
    if value:
        console.print(f"Proga version {proga.__version__}")
        raise typer.Exit()


@app.callback()
def main(
    journal: str = typer.Option(
        "donnees/journal.yaml",
        "--journal",
        "-j",
        envvar="PROGA_JOURNAL",
        help="Chemin vers le fichier YAML du journal",
    ),
    espace: str = typer.Option(
        "defaut",
        "--espace",
        "-e",
        envvar="PROGA_ESPACE",
        help="Identifiant de l'espace de travail",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        help="Afficher les messages de journalisation",
    ),
    version: Optional[bool] = typer.Option(
        None,
        "--version",
        "-v",
        help="Afficher la version de Proga",
        callback=_version_callback,
        is_eager=True,
    ),
) -> None:
    """Proga - Moteur fiscal et comptabilite en partie double."""
    global _journal_path, _espace
    if journal:
        _journal_path = Path(journal)
    if espace:
        _espace = espace
    if verbose:
        logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")


# Import et enregistrement des sous-commandes
from proga.cli.fiscal import fiscal_app  # noqa: E402
from proga.cli.grand_livre import bilan, journal_app, soldes  # noqa: E402
from proga.cli.paie import paie_app  # noqa: E402

app.add_typer(fiscal_app, name="fiscal", help="Simulations fiscales (TVA, CSS, IS/IMF, IRPP)")
app.add_typer(journal_app, name="journal", help="Saisie et consultation du journal")
app.add_typer(paie_app, name="paie", help="Paie de l'emploi a domicile")
app.command(name="soldes", help="Afficher les soldes de tous les comptes")(soldes)
app.command(name="bilan", help="Afficher le bilan (actif, passif, produits, charges)")(bilan)
