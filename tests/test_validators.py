import pytest

from englishapp.errors import MessageError
from englishapp.validators import (
    check_fields,
    validate_account_type,
    validate_date,
    validate_status_alarm,
)


@pytest.mark.parametrize("value", ["2024-01-31", "2000-02-29"])
def test_validate_date_accepts_valid(value):
    assert validate_date(value) is True


@pytest.mark.parametrize("value", ["2023-02-29", "2024-1-5", "31-01-2024", "", 20240131, None])
def test_validate_date_rejects_invalid(value):
    assert validate_date(value) is False


@pytest.mark.parametrize("value", ["admin", "siswa", "pakar"])
def test_validate_account_type_accepts_known(value):
    assert validate_account_type(value) is True


@pytest.mark.parametrize("value", ["Admin", "user", "", 1])
def test_validate_account_type_rejects_other(value):
    assert validate_account_type(value) is False


def test_validate_status_alarm():
    assert validate_status_alarm("1") is True
    assert validate_status_alarm("0") is True
    assert validate_status_alarm("2") is False
    assert validate_status_alarm(1) is False


def test_check_fields_passes_valid_values():
    values = {"role": "siswa", "birth": "2010-05-06", "alarm": "0"}
    rules = {"role": ["required", "jenisAkunValidator"], "birth": "date", "alarm": "statusAlarm"}
    assert check_fields(values, rules) is None


def test_check_fields_raises_bad_request():
    with pytest.raises(MessageError) as info:
        check_fields({"role": "guest"}, {"role": "jenisAkunValidator"})
    assert info.value.status_code == 400
    assert "role" in info.value.message
    assert "jenisAkunValidator" in info.value.message


def test_check_fields_required_missing():
    with pytest.raises(MessageError) as info:
        check_fields({}, {"email": "required"})
    assert info.value.error == "BAD_REQUEST"
    assert info.value.message.startswith("email")


def test_check_fields_empty_optional_skipped():
    assert check_fields({"birth": ""}, {"birth": "date"}) is None


def test_check_fields_reports_all_failures():
    with pytest.raises(MessageError) as info:
        check_fields({"a": "x", "b": "y"}, {"a": "date", "b": "statusAlarm"})
    assert len(info.value.message.split(";")) == 2


def test_check_fields_unknown_rule():
    with pytest.raises(ValueError):
        check_fields({"a": "x"}, {"a": "nonsense"})