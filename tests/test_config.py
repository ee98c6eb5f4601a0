import pytest
from pydantic import ValidationError

from rfcmx.config import RfcmxConfig, load_config


def test_defaults():
    cfg = RfcmxConfig()
    assert cfg.dates.permissive is True
    assert cfg.dates.min_year == 1900
    assert cfg.validation.century_pivot is None
    assert cfg.validation.check_blocklist is True
    assert cfg.detectors.enabled_kinds() == ["RFC", "CURP", "NSS"]


def test_load_config(tmp_path):
    path = tmp_path / "rfcmx.yaml"
    path.write_text(
        "dates:\n"
        "  permissive: false\n"
        "validation:\n"
        "  century_pivot: 30\n"
        "detectors:\n"
        "  nss: false\n",
        encoding="utf-8",
    )
    cfg = load_config(path)
    assert cfg.dates.permissive is False
    assert cfg.validation.century_pivot == 30
    assert cfg.detectors.enabled_kinds() == ["RFC", "CURP"]


def test_empty_file_gives_defaults(tmp_path):
    path = tmp_path / "rfcmx.yaml"
    path.write_text("", encoding="utf-8")
    assert load_config(path) == RfcmxConfig()
    assert load_config(None) == RfcmxConfig()


def test_pivot_range_enforced():
    with pytest.raises(ValidationError):
        RfcmxConfig(validation={"century_pivot": 120})
