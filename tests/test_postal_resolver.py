import httpx
import pytest

from src.shipquote.models.domain import Coordinates
from src.shipquote.services.postal import (
    AddressLookupError,
    InvalidPostalCodeError,
    PostalCodeNotFoundError,
    PostalResolver,
    clean_postal_code,
    format_postal_code,
    is_delivery_available,
    is_valid_postal_code,
)
from src.shipquote.services.postal.capitals import STATE_CAPITAL_COORDINATES

LOOKUP_URL = "https://cep.test/ws"
GEOCODING_URL = "https://geo.test/search"

ADDRESSES = {
    "01310100": {
        "cep": "01310-100",
        "logradouro": "Avenida Paulista",
        "bairro": "Bela Vista",
        "localidade": "São Paulo",
        "uf": "SP",
    },
    "20040020": {
        "cep": "20040-020",
        "logradouro": "Praça Pio X",
        "bairro": "Centro",
        "localidade": "Rio de Janeiro",
        "uf": "RJ",
    },
    "99999000": {
        "cep": "99999-000",
        "logradouro": "",
        "bairro": "",
        "localidade": "Nowhere",
        "uf": "XX",
    },
}


def _transport(calls: list, geocoding=None, lookup_status: int = 200) -> httpx.MockTransport:
    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request)
        if request.url.host == "cep.test":
            if lookup_status != 200:
                return httpx.Response(lookup_status)
            cep = request.url.path.split("/")[2]
            return httpx.Response(200, json=ADDRESSES.get(cep, {"erro": True}))
        if geocoding is None:
            return httpx.Response(200, json=[{"lat": "-23.5613", "lon": "-46.6565"}])
        return geocoding(request)

    return httpx.MockTransport(handler)


def _resolver(calls: list, **kwargs) -> PostalResolver:
    from src.shipquote.services.postal.client import AddressLookupClient, GeocodingClient

    client = httpx.Client(transport=_transport(calls, **kwargs))
    return PostalResolver(
        AddressLookupClient(client, base_url=LOOKUP_URL),
        GeocodingClient(client, base_url=GEOCODING_URL, country_code="br"),
    )


@pytest.mark.parametrize("value", ["123", "", "0131010", "013101000", "abc-defgh"])
def test_resolve_rejects_malformed_postal_codes(value):
    calls: list = []
    with pytest.raises(InvalidPostalCodeError):
        _resolver(calls).resolve(value)
    assert calls == []


def test_resolve_uses_geocoding_coordinates():
    calls: list = []
    address = _resolver(calls).resolve("01310-100")

    assert address.postal_code == "01310100"
    assert address.street == "Avenida Paulista"
    assert address.neighborhood == "Bela Vista"
    assert address.city == "São Paulo"
    assert address.state_code == "SP"
    assert address.coordinates == Coordinates(lat=-23.5613, lng=-46.6565)
    assert address.coordinates_source == "geocoding"

    assert len(calls) == 2
    assert calls[0].url.path == "/ws/01310100/json/"
    geocoding_params = calls[1].url.params
    assert geocoding_params["q"] == "01310100, São Paulo, SP, Brazil"
    assert geocoding_params["countrycodes"] == "br"
    assert geocoding_params["format"] == "json"


@pytest.mark.parametrize("flag", [True, "true"])
def test_resolve_raises_not_found(monkeypatch, flag):
    monkeypatch.setitem(ADDRESSES, "12345678", {"erro": flag})
    calls: list = []
    with pytest.raises(PostalCodeNotFoundError):
        _resolver(calls).resolve("12345-678")
    assert len(calls) == 1


def test_resolve_wraps_lookup_http_errors():
    calls: list = []
    with pytest.raises(AddressLookupError):
        _resolver(calls, lookup_status=503).resolve("01310100")


def test_geocoding_server_error_falls_back_to_state_capital():
    calls: list = []
    address = _resolver(calls, geocoding=lambda request: httpx.Response(500)).resolve("20040-020")

    assert address.coordinates == STATE_CAPITAL_COORDINATES["RJ"]
    assert address.coordinates_source == "state_capital"


def test_geocoding_empty_result_falls_back_to_state_capital():
    calls: list = []
    address = _resolver(calls, geocoding=lambda request: httpx.Response(200, json=[])).resolve("01310100")

    assert address.coordinates == STATE_CAPITAL_COORDINATES["SP"]


def test_geocoding_network_error_falls_back_to_state_capital():
    def broken(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    calls: list = []
    address = _resolver(calls, geocoding=broken).resolve("01310100")

    assert address.coordinates == STATE_CAPITAL_COORDINATES["SP"]


def test_geocoding_unparsable_coordinates_fall_back_to_state_capital():
    calls: list = []
    geocoding = lambda request: httpx.Response(200, json=[{"lat": "n/a", "lon": "n/a"}])
    address = _resolver(calls, geocoding=geocoding).resolve("01310100")

    assert address.coordinates == STATE_CAPITAL_COORDINATES["SP"]


@pytest.mark.parametrize(
    "geocoded",
    [
        {"lat": None, "lon": None},
        {"lat": ["-22.9"], "lon": {"value": "-43.1"}},
        {"lat": "nan", "lon": "-43.1729"},
        {"lat": "-22.9068", "lon": "inf"},
    ],
)
def test_geocoding_null_or_non_finite_coordinates_fall_back_to_state_capital(geocoded):
    calls: list = []
    geocoding = lambda request: httpx.Response(200, json=[geocoded])
    address = _resolver(calls, geocoding=geocoding).resolve("20040020")

    assert address.coordinates == STATE_CAPITAL_COORDINATES["RJ"]
    assert address.coordinates_source == "state_capital"


def test_non_ascii_digits_are_rejected_before_any_lookup():
    calls: list = []
    with pytest.raises(InvalidPostalCodeError):
        _resolver(calls).resolve("١٢٣٤٥٦٧٨")
    assert calls == []
    assert clean_postal_code("０１３１０-１００") == ""


def test_unknown_state_leaves_coordinates_empty():
    calls: list = []
    address = _resolver(calls, geocoding=lambda request: httpx.Response(200, json=[])).resolve("99999-000")

    assert address.state_code == "XX"
    assert address.coordinates is None
    assert address.coordinates_source is None


def test_capital_table_covers_every_federative_unit():
    assert len(STATE_CAPITAL_COORDINATES) == 27
    assert "DF" in STATE_CAPITAL_COORDINATES


def test_postal_code_helpers():
    assert clean_postal_code("01310-100") == "01310100"
    assert format_postal_code("01310100") == "01310-100"
    assert format_postal_code("123") == "123"
    assert is_valid_postal_code("20040-020")
    assert not is_valid_postal_code("2004-020")


@pytest.mark.parametrize(
    "value,expected",
    [
        ("01310-100", True),
        ("99999-999", True),
        ("00999-999", False),
        ("", False),
        ("CEP", False),
    ],
)
def test_is_delivery_available(value, expected):
    assert is_delivery_available(value) is expected
