import numpy as np
import pytest

from knnsearch.errors import EmptySearchSpace, InvalidK
from knnsearch.kspec import KSpec, parse_k_spec


@pytest.mark.parametrize(
    "text,expected",
    [
        ("3", (3,)),
        ("3-6", (3, 4, 5, 6)),
        ("2-8,2", (2, 4, 6, 8)),
        ("1-10,3", (1, 4, 7, 10)),
        ("2-9,3", (2, 5, 8)),
        ("4-4", (4,)),
        (" 5 ", (5,)),
        (7, (7,)),
    ],
)
def test_parse_k_spec(text, expected):
    assert tuple(parse_k_spec(text)) == expected


@pytest.mark.parametrize(
    "text",
    ["0", "0-3", "5-3", "3-6,0", "3,2", "a", "", "-3", "3-", "1.5", "2-x", "1-4,y"],
)
def test_parse_k_spec_rejects(text):
    with pytest.raises(InvalidK):
        parse_k_spec(text)


def test_kspec_invariants():
    with pytest.raises(EmptySearchSpace):
        KSpec(())
    with pytest.raises(InvalidK):
        KSpec((3, 1))
    with pytest.raises(InvalidK):
        KSpec((0, 1))
    with pytest.raises(InvalidK):
        KSpec((2, 2))


def test_kspec_properties():
    spec = parse_k_spec("3-7,2")
    assert list(spec) == [3, 5, 7]
    assert len(spec) == 3
    assert spec.smallest == 3
    assert spec.largest == 7
    assert not spec.is_single
    assert parse_k_spec("4").is_single


def test_validate_against_training_size():
    spec = parse_k_spec("1-5")
    assert spec.validate(5) is spec
    with pytest.raises(InvalidK):
        spec.validate(4)


def test_huge_range_is_rejected_without_expanding():
    spec = parse_k_spec("1-1000000000000")
    assert len(spec) == 1000000000000
    assert spec.largest == 1000000000000
    assert str(spec) == "1-1000000000000,1"
    with pytest.raises(InvalidK):
        spec.validate(150)
    with pytest.raises(InvalidK):
        parse_k_spec("5-1000000000000,7").validate(40)


def test_kspec_accepts_numpy_integers():
    spec = KSpec(np.arange(1, 4))
    assert spec.values == (1, 2, 3)
    assert all(type(k) is int for k in spec)
