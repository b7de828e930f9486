"""Moteur de calcul fiscal: TVA, CSS, IS vs IMF et IRPP."""

from proga.fiscal.bases import (
    BasesFiscales,
    ResultatsFiscaux,
    charger_bases,
    evaluer_bases_fiscales,
)
from proga.fiscal.calcul import (
    ResultatCSS,
    ResultatIRPP,
    ResultatISvsIMF,
    ResultatTVA,
    calculer_css,
    calculer_irpp,
    calculer_is_vs_imf,
    calculer_tva,
)
from proga.fiscal.foyer import (
    RevenusFoyer,
    SimulationIRPP,
    SituationFamiliale,
    calculer_parts,
    simuler_irpp,
)
from proga.fiscal.taux import (
    BAREME_IRPP_DEFAUT,
    TrancheImposition,
    charger_bareme,
    valider_bareme,
)

__all__ = [
    "BasesFiscales",
    "ResultatsFiscaux",
    "charger_bases",
    "evaluer_bases_fiscales",
    "ResultatCSS",
    "ResultatIRPP",
    "ResultatISvsIMF",
    "ResultatTVA",
    "calculer_css",
    "calculer_irpp",
    "calculer_is_vs_imf",
    "calculer_tva",
    "RevenusFoyer",
    "SimulationIRPP",
    "SituationFamiliale",
    "calculer_parts",
    "simuler_irpp",
    "BAREME_IRPP_DEFAUT",
    "TrancheImposition",
    "charger_bareme",
    "valider_bareme",
]
