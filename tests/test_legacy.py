from datetime import date

import pytest
from pydantic import ValidationError

from family_registry.schemas.legacy import LegacyMemberIn, coerce_ser_no, coerce_ser_no_list


def member_fields(raw):
    return LegacyMemberIn.model_validate(raw).member_fields()


@pytest.mark.parametrize(
    "value, expected",
    [
        (7, 7),
        ("12", 12),
        (" 5 ", 5),
        (4.0, 4),
        (0, None),
        ("0", None),
        ("", None),
        ("   ", None),
        (None, None),
        (True, None),
        (-3, None),
        ("abc", None),
        (2.5, None),
        ([1], None),
    ],
)
def test_coerce_ser_no(value, expected):
    assert coerce_ser_no(value) == expected


def test_coerce_ser_no_list_drops_placeholders_and_duplicates():
    assert coerce_ser_no_list([1, "2", 0, "", 2, None, "x"]) == [1, 2]
    assert coerce_ser_no_list("1,2") == []
    assert coerce_ser_no_list(None) == []


def test_normalize_flat_legacy_document():
    fields = member_fields({
        "Ser No": "12",
        "First Name": " Ravi ",
        "Last Name": "Patil",
        "fatherSerNo": 0,
        "sonDaughterSerNo": [13, "14", 0],
        "gmail": "Ravi@Example.COM",
        "vansh": 3,
        "Date of Birth": "1980-05-01",
        "address": {"street": "1 Main Road", "city": "Pune", "country": ""},
    })
    assert fields == {
        "ser_no": 12,
        "first_name": "Ravi",
        "last_name": "Patil",
        "son_daughter_ser_nos": [13, 14],
        "email": "ravi@example.com",
        "vansh": "3",
        "date_of_birth": date(1980, 5, 1),
        "address": "1 Main Road, Pune",
    }


def test_nested_personal_details_take_precedence():
    fields = member_fields({
        "firstName": "Outer",
        "personalDetails": {"firstName": "Inner", "dateOfBirth": "1990-01-02T00:00:00Z"},
    })
    assert fields["first_name"] == "Inner"
    assert fields["date_of_birth"] == date(1990, 1, 2)


def test_composed_name_is_split():
    fields = member_fields({"name": "Asha Rao Deshmukh"})
    assert fields["first_name"] == "Asha"
    assert fields["last_name"] == "Rao Deshmukh"


def test_unparseable_values_are_dropped():
    fields = member_fields({"firstName": "A", "dob": "someday", "spouseSerNo": "n/a"})
    assert fields == {"first_name": "A"}


def test_personal_details_that_is_not_a_mapping_is_ignored():
    fields = member_fields({"firstName": "Flat", "personalDetails": "n/a"})
    assert fields == {"first_name": "Flat"}


def test_date_values_already_parsed():
    fields = member_fields({"firstName": "A", "dateOfDeath": date(2001, 3, 4)})
    assert fields["date_of_death"] == date(2001, 3, 4)


def test_non_mapping_document_is_invalid():
    with pytest.raises(ValidationError):
        LegacyMemberIn.model_validate(["not", "a", "member"])
