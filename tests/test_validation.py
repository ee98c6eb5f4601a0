"""Tests for RFC, CURP and NSS validation."""
from datetime import date

import pytest
from rfcmx import IdentifierKind, detect_kind, validate_identifier
from rfcmx.config import RfcmxConfig, ValidationConfig
from rfcmx.detect.validators import curp_check_digit
from rfcmx.engine.validation import clean_candidate, validate_curp, validate_nss, validate_rfc

TODAY = date(2026, 10, 18)


def _cfg(**validation):
    return RfcmxConfig(validation=ValidationConfig(**validation))


class TestRfc:
    def test_valid_rfc_details(self):
        result = validate_rfc("PEGJ800101LN4", today=TODAY)
        assert result.valid
        assert result.kind is IdentifierKind.RFC
        assert result.errors == []
        assert result.details["letters"] == "PEGJ"
        assert result.details["birth_date"] == "1980-01-01"
        assert result.details["homoclave"] == "LN"
        assert result.details["check_digit"] == "4"
        assert result.details["expected_check_digit"] == "4"

    def test_input_is_cleaned(self):
        result = validate_rfc("  pegj-800101-ln4 ", today=TODAY)
        assert result.valid
        assert result.details["normalized"] == "PEGJ800101LN4"

    def test_wrong_check_digit(self):
        result = validate_rfc("PEGJ800101LN5", today=TODAY)
        assert not result.valid
        assert result.details["expected_check_digit"] == "4"
        assert any("check digit" in e for e in result.errors)

    def test_impossible_date(self):
        # month 13, checksum is consistent
        result = validate_rfc("PEGJ801301LN7", today=TODAY)
        assert not result.valid
        assert result.details["birth_date"] is None
        assert result.errors == ["embedded date 801301 is not a calendar date"]

    def test_blocklisted_letters(self):
        result = validate_rfc("PUTO8503123J5", today=TODAY)
        assert not result.valid
        assert result.errors == ["leading letters PUTO are blocklisted"]

    def test_blocklist_can_be_disabled(self):
        assert validate_rfc("PUTO8503123J5", cfg=_cfg(check_blocklist=False), today=TODAY).valid

    def test_century_pivot(self):
        # '30' is 1930 with the default pivot (current two-digit year)
        result = validate_rfc("PEGJ300101LN5", today=TODAY)
        assert result.valid
        assert result.details["birth_date"] == "1930-01-01"

        result = validate_rfc("PEGJ300101LN5", cfg=_cfg(century_pivot=30), today=TODAY)
        assert not result.valid
        assert result.errors == ["embedded year 2030 is out of range"]

    @pytest.mark.parametrize("bad", ["", "PEGJ800101LN", "PEGJ800101LN44", "1EGJ800101LN4", "HEGJ850115HDFRRN04"])
    def test_malformed(self, bad):
        result = validate_rfc(bad, today=TODAY)
        assert not result.valid
        assert result.kind is IdentifierKind.RFC
        assert "is not a well-formed RFC" in result.errors[0]


class TestCurp:
    def test_valid_curp_before_2000(self):
        result = validate_curp("HEGJ850115HDFRRN04", today=TODAY)
        assert result.valid
        assert result.details["sex"] == "H"
        assert result.details["state"] == "DF"
        assert result.details["state_name"] == "CIUDAD DE MEXICO"
        assert result.details["birth_date"] == "1985-01-15"
        assert result.details["differentiator"] == "0"

    def test_letter_differentiator_means_2000s(self):
        result = validate_curp("GOMA050312MJCNRLA8", today=TODAY)
        assert result.valid
        assert result.details["birth_date"] == "2005-03-12"
        assert result.details["sex"] == "M"

    def test_wrong_check_digit(self):
        result = validate_curp("PEGJ850115HJCRRL09", today=TODAY)
        assert not result.valid
        assert result.details["expected_check_digit"] == "4"

    def test_unknown_state(self):
        prefix = "HEGJ850115HZZRRN0"
        result = validate_curp(prefix + curp_check_digit(prefix), today=TODAY)
        assert not result.valid
        assert result.errors == ["unknown state code ZZ"]
        assert result.details["state_name"] is None


class TestNss:
    def test_valid_nss_details(self):
        result = validate_nss("12058500105", today=TODAY)
        assert result.valid
        assert result.details["subdelegation"] == "12"
        assert result.details["registration_year"] == 2005
        assert result.details["birth_year"] == 1985
        assert result.details["sequence"] == "001"
        assert result.details["check_pair"] == "05"

    @pytest.mark.parametrize("nss", ["12058500400", "12058500203", "1205-8500-105"])
    def test_more_valid_numbers(self, nss):
        assert validate_nss(nss, today=TODAY).valid

    def test_wrong_check_pair(self):
        result = validate_nss("12058500106", today=TODAY)
        assert not result.valid
        assert result.details["expected_check_pair"] == "05"

    def test_born_after_registration(self):
        result = validate_nss("37920123400", today=TODAY)
        assert not result.valid
        assert result.errors == ["birth year 2001 is after registration year 1992"]


class TestDispatch:
    @pytest.mark.parametrize(
        "candidate, kind",
        [
            ("PEGJ800101LN4", IdentifierKind.RFC),
            ("HEGJ850115HDFRRN04", IdentifierKind.CURP),
            ("12058500105", IdentifierKind.NSS),
            ("INVALID", IdentifierKind.UNKNOWN),
            ("", IdentifierKind.UNKNOWN),
        ],
    )
    def test_detect_kind(self, candidate, kind):
        assert detect_kind(candidate) is kind

    def test_detect_kind_ignores_checksums(self):
        assert detect_kind("PEGJ800101LN5") is IdentifierKind.RFC

    def test_auto_dispatch(self):
        assert validate_identifier("PEGJ800101LN4", today=TODAY).kind is IdentifierKind.RFC
        assert validate_identifier("HEGJ850115HDFRRN04", today=TODAY).kind is IdentifierKind.CURP
        assert validate_identifier("12058500105", today=TODAY).kind is IdentifierKind.NSS

    def test_forced_kind(self):
        result = validate_identifier("PEGJ800101LN4", kind="curp", today=TODAY)
        assert not result.valid
        assert result.kind is IdentifierKind.CURP

    @pytest.mark.parametrize("candidate", [None, 12345, "", "   ", "no es un rfc"])
    def test_never_raises(self, candidate):
        result = validate_identifier(candidate, today=TODAY)
        assert not result.valid
        assert result.kind is IdentifierKind.UNKNOWN
        assert result.errors == ["not a recognized identifier"]

    def test_unknown_forced_kind(self):
        result = validate_identifier("PEGJ800101LN4", kind="passport")
        assert result.kind is IdentifierKind.UNKNOWN
        assert not result.valid

    def test_to_dict(self):
        data = validate_identifier("PEGJ800101LN4", today=TODAY).to_dict()
        assert data["kind"] == "RFC"
        assert data["valid"] is True
        assert data["details"]["normalized"] == "PEGJ800101LN4"


def test_clean_candidate():
    assert clean_candidate(" hegj 850115 hdfrrn04 ") == "HEGJ850115HDFRRN04"
    assert clean_candidate(None) == ""
