import pytest

from venue_seeder.etl import catalog


def test_supported_areas_are_ginza_and_osaka():
    assert catalog.SUPPORTED_AREAS == ("ginza", "osaka")
    assert catalog.DEFAULT_AREAS == ("ginza", "osaka")


def test_get_area_returns_anchor_and_queries():
    ginza = catalog.get_area("ginza")
    assert ginza.location == "35.6717,139.7647"
    assert ginza.radius == 1500
    assert ginza.queries[0] == "luxury shopping Ginza Tokyo"
    assert len(ginza.queries) == 12

    osaka = catalog.get_area(" Osaka ")
    assert osaka.area == "osaka"
    assert osaka.radius == 2000
    assert "Osaka Castle" in osaka.queries


@pytest.mark.parametrize("area", ["kyoto", "", None, 3])
def test_get_area_rejects_unknown_area(area):
    with pytest.raises(catalog.UnknownAreaError):
        catalog.get_area(area)
