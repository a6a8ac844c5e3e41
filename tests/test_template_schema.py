import jsonschema
import pytest

from parkpermits.schemas import load_template_schema

VALID_TEMPLATE = {
    "id": 5,
    "parkId": 3,
    "permitType": "Picnic Shelter",
    "templateData": {
        "name": "Picnic Shelter",
        "applicationFee": "15.00",
        "locations": [
            {
                "name": "Shelter A",
                "blackoutDates": ["2024-07-04"],
                "blackoutRules": [
                    {"startDate": "2024-07-01", "endDate": "2024-07-03", "reason": "Festival"},
                    {"startDate": "2024-08-01", "endDate": None, "reason": "Cleanup"},
                ],
                "availableDates": [{"startDate": "2024-05-01", "repeatWeekly": True}],
            }
        ],
    },
}


def test_template_schema_accepts_template() -> None:
    jsonschema.validate(instance=VALID_TEMPLATE, schema=load_template_schema())


def test_template_schema_rejects_rule_without_start() -> None:
    invalid = {
        "id": 1,
        "templateData": {
            "name": "Bad",
            "locations": [{"name": "A", "blackoutRules": [{"endDate": "2024-07-01"}]}],
        },
    }
    with pytest.raises(jsonschema.ValidationError):
        jsonschema.validate(instance=invalid, schema=load_template_schema())
