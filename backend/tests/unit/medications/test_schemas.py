import pytest
from pydantic import ValidationError

from carecoord.schemas.medications import InteractionRecord
from carecoord.services.severity import Severity


@pytest.mark.parametrize("drug1, drug2", [("Aspirin", "Aspirin"), ("A", "a"), ("Warfarin", "WARFARIN")])
def test_interaction_record_rejects_same_participant(drug1, drug2):
    with pytest.raises(ValidationError):
        InteractionRecord(drug1=drug1, drug2=drug2, description="", severity=Severity.MEDIUM)


def test_interaction_record_is_frozen():
    record = InteractionRecord(drug1="Coumadin", drug2="Aspirin", description="Bleeding", severity=Severity.HIGH)

    with pytest.raises(ValidationError):
        record.drug1 = "Jantoven"
