import pytest
from rfcmx.detect.validators import (
    curp_check_digit,
    curp_check_ok,
    normalize_spaces_dashes,
    normalize_upper,
    nss_check_ok,
    nss_check_pair,
    rfc_check_ok,
)


def test_normalizers():
    assert normalize_spaces_dashes("PEGJ-800101 LN4") == "PEGJ800101LN4"
    assert normalize_upper("  pegj800101ln4 ") == "PEGJ800101LN4"


@pytest.mark.parametrize("rfc", ["PEGJ800101LN4", "LOSM9005158B4", "BCAX0001013A5", "PUTX8503123J3"])
def test_rfc_check_ok(rfc):
    assert rfc_check_ok(rfc)


@pytest.mark.parametrize("rfc", ["PEGJ800101LN5", "PEGJ800101LN", "PEGJ800101LN44", ""])
def test_rfc_check_rejects(rfc):
    assert not rfc_check_ok(rfc)


@pytest.mark.parametrize(
    "curp, digit",
    [
        ("BOXW310820HNERXN09", "9"),
        ("HEGJ850115HDFRRN04", "4"),
        ("GOMA050312MJCNRLA8", "8"),
    ],
)
def test_curp_check_digit(curp, digit):
    assert curp_check_digit(curp) == digit
    assert curp_check_ok(curp)


def test_curp_check_rejects():
    assert not curp_check_ok("BOXW310820HNERXN08")
    assert not curp_check_ok("BOXW310820HNERXN0")


@pytest.mark.parametrize(
    "nss, pair",
    [
        ("12058500105", "05"),
        ("12058500203", "03"),
        ("12058500400", "00"),  # remainder 1
        ("37920123400", "00"),  # remainder 0
    ],
)
def test_nss_check_pair(nss, pair):
    assert nss_check_pair(nss) == pair
    assert nss_check_ok(nss)


def test_nss_check_rejects():
    assert not nss_check_ok("12058500106")
    assert not nss_check_ok("1205850010")
    assert not nss_check_ok("1205850010A")
