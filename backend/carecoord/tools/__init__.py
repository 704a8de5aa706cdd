"""
Tools Package

Guarded single-purpose RxNav lookups:
- RxCuiLookup / NameSuggester: name resolution and autocomplete
- DrugInteractionChecker: interaction list for resolved RxCUIs
- MedicationInfoLookup / SideEffectLookup: concept details
"""

from carecoord.tools.base import BaseTool
from carecoord.tools.rxnorm_lookup import RxCuiLookup, NameSuggester
from carecoord.tools.drug_checker import DrugInteractionChecker
from carecoord.tools.medication_info import MedicationInfoLookup, SideEffectLookup

__all__ = [
    'BaseTool',
    'RxCuiLookup',
    'NameSuggester',
    'DrugInteractionChecker',
    'MedicationInfoLookup',
    'SideEffectLookup',
]
