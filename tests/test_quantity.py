from decimal import Decimal

import pytest

from kube_capacity.compute.models import Quantity, QuantityError


def test_parse_keeps_text_and_exact_value():
    qty = Quantity.parse('250m')
    assert str(qty) == '250m'
    assert qty.value == Decimal('0.25')


def test_parse_accepts_numbers():
    qty = Quantity.parse(2)
    assert str(qty) == '2'
    assert qty.value == Decimal(2)


def test_parse_binary_suffix():
    assert Quantity.parse('64Mi').value == 64 * 1024 * 1024


def test_invalid_quantity_names_location():
    with pytest.raises(QuantityError) as exc:
        Quantity.parse('lots', where='Deployment default/web container app.requests.cpu')
    msg = str(exc.value)
    assert "'lots'" in msg
    assert 'default/web' in msg


def test_quantity_error_is_value_error():
    with pytest.raises(ValueError):
        Quantity.parse('12XYZ')
