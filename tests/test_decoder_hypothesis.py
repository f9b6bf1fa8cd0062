"""Property-based tests for the status frame decoder."""

import pytest
from hypothesis import given
from hypothesis import strategies as st

from solartherm.decoder import decode_tokens
from solartherm.exceptions import FieldMissingError, FieldParseError
from solartherm.schema import (
    STATUS_SCHEMA,
    FieldRole,
    StatusTag,
    position_of,
    record_tags,
)
from solartherm.transport import SAMPLE_FRAME

BASE_TOKENS = SAMPLE_FRAME.decode().rstrip("\r\n").split("\t")


def _with(**values: str) -> list[str]:
    tokens = list(BASE_TOKENS)
    for name, raw in values.items():
        tokens[position_of(StatusTag(name))] = raw
    return tokens


@given(
    water_raw=st.integers(min_value=0, max_value=1000),  # 0 to 100°C (deci)
    device_raw=st.integers(min_value=0, max_value=150),  # whole degrees
    power_raw=st.integers(min_value=0, max_value=5000),  # W
    energy_raw=st.integers(min_value=0, max_value=10**7),  # Wh
)
def test_scaling_fuzzing(water_raw, device_raw, power_raw, energy_raw):
    """Fuzz the scaled slots and check each lands in its canonical unit."""
    record = decode_tokens(
        _with(
            wassertemp=str(water_raw),
            geraetetemp=str(device_raw),
            solarleistung=str(power_raw),
            solarenergie_heute=str(energy_raw),
        )
    )

    assert record.wassertemp.celsius == pytest.approx(water_raw / 10.0)
    assert record.geraetetemp.celsius == device_raw
    assert record.solarleistung.watts == power_raw
    assert record.solarleistung.kilowatts == pytest.approx(power_raw / 1000)
    assert record.solarenergie_heute.watt_hours == energy_raw
    assert record.to_dict()["solarenergie_heute_wh"] == energy_raw


@given(flag=st.integers(min_value=0, max_value=255))
def test_flag_fuzzing(flag):
    record = decode_tokens(_with(dc_trenner=str(flag)))
    assert record.dc_trenner is (flag != 0)


@given(
    length=st.integers(
        min_value=0, max_value=position_of(StatusTag.SERIENNUMMER)
    )
)
def test_truncation_names_first_missing_slot(length):
    """Any cut before the serial number fails on the first unbound slot."""
    expected = next(tag for tag in record_tags() if position_of(tag) >= length)
    with pytest.raises(FieldMissingError) as excinfo:
        decode_tokens(BASE_TOKENS[:length])
    assert excinfo.value.tag is expected


@given(
    tag=st.sampled_from(
        [
            spec.tag
            for spec in STATUS_SCHEMA
            if spec.role not in (FieldRole.TEXT, FieldRole.RESERVED)
        ]
    ),
    garbage=st.text(alphabet="abcxyzV_ ", min_size=1, max_size=8),
)
def test_garbage_in_numeric_slot(tag, garbage):
    with pytest.raises(FieldParseError) as excinfo:
        decode_tokens(_with(**{tag.value: garbage}))
    assert excinfo.value.tag is tag
    assert excinfo.value.raw_value == garbage


@given(text=st.text(alphabet=st.characters(exclude_characters="\t\r\n")))
def test_text_slots_pass_through(text):
    record = decode_tokens(_with(firmware=text))
    assert record.firmware == text
