"""Journal comptable par espace de travail, avec depot injectable.

Le journal est un registre en ajout seul: une ecriture n'est jamais modifiee,
seulement supprimee. Les vues derivees (soldes, bilan, statistiques) sont
recalculees a chaque appel.
"""

from __future__ import annotations

import datetime
import logging
import uuid
from decimal import Decimal
from pathlib import Path
from typing import Iterable, Protocol

import yaml
from pydantic import ValidationError as PydanticValidationError

from proga.erreurs import ValidationError
from proga.grand_livre.modeles import (
    EcritureComptable,
    SectionBilan,
    SoldeCompte,
    StatistiquesGrandLivre,
)
from proga.grand_livre.soldes import (
    calculer_soldes,
    calculer_statistiques,
    generer_bilan,
    valider_ecriture,
)

logger = logging.getLogger(__name__)


class DepotJournal(Protocol):
    """Stockage des ecritures, une liste par espace de travail."""

    def charger(self, espace: str) -> list[EcritureComptable]: ...

    def sauvegarder(self, espace: str, ecritures: list[EcritureComptable]) -> None: ...


class DepotMemoire:
    """Depot en memoire (tests, usage embarque)."""

    def __init__(self) -> None:
        self._ecritures: dict[str, list[EcritureComptable]] = {}

    def charger(self, espace: str) -> list[EcritureComptable]:
        return list(self._ecritures.get(espace, []))

    def sauvegarder(self, espace: str, ecritures: list[EcritureComptable]) -> None:
        self._ecritures[espace] = list(ecritures)


class DepotYaml:
    """Depot persistant dans un fichier YAML: {espace: [ecriture, ...]}."""

    def __init__(self, chemin: Path | str | None = None) -> None:
        self.chemin = Path(chemin) if chemin is not None else Path("donnees/journal.yaml")

    def _lire(self) -> dict:
        if not self.chemin.exists():
            return {}
        try:
            with open(self.chemin, encoding="utf-8") as f:
                donnees = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ValidationError(f"Journal illisible dans {self.chemin}: {e}") from e
        return donnees if isinstance(donnees, dict) else {}

    def charger(self, espace: str) -> list[EcritureComptable]:
        donnees = self._lire().get(espace) or []
        logger.debug("Journal %s: %d ecriture(s) lue(s) depuis %s", espace, len(donnees), self.chemin)
        try:
            return [EcritureComptable.model_validate(d) for d in donnees]
        except PydanticValidationError as e:
            raise ValidationError(f"Ecriture invalide dans {self.chemin}: {e}") from e

    def sauvegarder(self, espace: str, ecritures: list[EcritureComptable]) -> None:
        """Reecrit le fichier de maniere atomique (ecriture tmp + rename)."""
        donnees = self._lire()
        donnees[espace] = [e.model_dump(mode="json") for e in ecritures]
        self.chemin.parent.mkdir(parents=True, exist_ok=True)
        tmp = self.chemin.with_suffix(self.chemin.suffix + ".tmp")
        with open(tmp, "w", encoding="utf-8") as f:
            yaml.dump(donnees, f, default_flow_style=False, allow_unicode=True, sort_keys=False)
        tmp.replace(self.chemin)


class Journal:
    """Journal d'un espace de travail."""

    def __init__(self, depot: DepotJournal, espace: str) -> None:
        if not espace or not espace.strip():
            raise ValidationError("Un espace de travail est requis pour un journal")
        self.depot = depot
        self.espace = espace
        self._ecritures = depot.charger(espace)

    @property
    def ecritures(self) -> list[EcritureComptable]:
        return list(self._ecritures)

    def _enregistrer(self, ecritures: list[EcritureComptable]) -> None:
        self.depot.sauvegarder(self.espace, ecritures)
        self._ecritures = ecritures

    def ajouter(
        self,
        date: datetime.date,
        description: str,
        compte_debit: str,
        compte_credit: str,
        montant: Decimal | str,
        reference: str | None = None,
        tags: Iterable[str] = (),
    ) -> EcritureComptable:
        """Valide et ajoute une ecriture au journal.

        Raises:
            ValidationError: Montant non positif ou non fini, compte vide.
        """
        try:
            ecriture = EcritureComptable(
                id=str(uuid.uuid4()),
                espace=self.espace,
                date=date,
                description=description,
                compte_debit=compte_debit.strip(),
                compte_credit=compte_credit.strip(),
                montant=montant,
                reference=reference,
                tags=tuple(tags),
                cree_le=datetime.datetime.now(datetime.timezone.utc),
            )
        except PydanticValidationError as e:
            raise ValidationError(f"Ecriture invalide: {e}") from e
        valider_ecriture(ecriture)
        self._enregistrer([*self._ecritures, ecriture])
        logger.info(
            "Ecriture ajoutee: %s %s/%s %s",
            ecriture.id,
            ecriture.compte_debit,
            ecriture.compte_credit,
            ecriture.montant,
        )
        return ecriture

    def supprimer(self, id_ecriture: str) -> bool:
        """Supprime definitivement une ecriture. Retourne False si l'id est inconnu."""
        restantes = [e for e in self._ecritures if e.id != id_ecriture]
        if len(restantes) == len(self._ecritures):
            logger.warning("Ecriture introuvable: %s", id_ecriture)
            return False
        self._enregistrer(restantes)
        logger.info("Ecriture supprimee: %s", id_ecriture)
        return True

    def vider(self) -> None:
        """Supprime toutes les ecritures de l'espace."""
        self._enregistrer([])
        logger.info("Journal %s vide", self.espace)

    def soldes(self) -> list[SoldeCompte]:
        return calculer_soldes(self._ecritures)

    def bilan(self) -> list[SectionBilan]:
        return generer_bilan(self.soldes())

    def statistiques(self) -> StatistiquesGrandLivre:
        return calculer_statistiques(self.soldes())
