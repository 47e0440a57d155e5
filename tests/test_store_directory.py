"""StoreDirectory: cache short-circuit and live discovery via Overpass."""

import httpx

from spread_api.services.domain import Point, StoreLocation
from spread_api.services.overpass_client import OverpassClient, build_query, parse_elements
from spread_api.services.store_directory import StoreDirectory, build_address

from tests.conftest import FakeCacheStore, RecordingHandler

CENTER = Point(30.0, -97.0)
OVERPASS_HOST = "overpass.kumi.systems"


class ExplodingPoiClient:
    """POI client double that fails the test if live discovery is attempted."""

    def __init__(self) -> None:
        self.calls = 0

    async def search(self, center: Point, radius_miles: float):
        self.calls += 1
        raise AssertionError("live discovery must not run when the cache has stores")


def _overpass_and_pages(elements: list[dict], pages: dict[str, httpx.Response | Exception]) -> RecordingHandler:
    def handler(request: httpx.Request) -> httpx.Response:
        if request.url.host == OVERPASS_HOST:
            return httpx.Response(200, json={"version": 0.6, "elements": elements})
        target = pages.get(str(request.url))
        if target is None:
            return httpx.Response(404, text="not found")
        if isinstance(target, Exception):
            raise target
        return target

    return RecordingHandler(handler)


def _node(osm_id: int, lat: float, lon: float, **tags: str) -> dict:
    return {"type": "node", "id": osm_id, "lat": lat, "lon": lon, "tags": tags}


async def test_cached_rows_skip_live_query(make_ctx) -> None:
    cached = StoreLocation("031234", "Taco Bell", "100 Main St", 30.01, -97.01)
    store = FakeCacheStore([cached])
    poi_client = ExplodingPoiClient()
    directory = StoreDirectory(make_ctx(store=store), poi_client=poi_client)

    stores = await directory.find_stores(CENTER, 10)

    assert stores == [cached]
    assert poi_client.calls == 0
    assert len(store.box_queries) == 1


async def test_rows_outside_box_do_not_count_as_cache_hit(make_ctx) -> None:
    far_away = StoreLocation("099999", "Taco Bell", "", 40.0, -74.0)
    store = FakeCacheStore([far_away])
    handler = _overpass_and_pages([], {})

    stores = await StoreDirectory(make_ctx(handler, store)).find_stores(CENTER, 10)

    assert stores == []
    assert handler.hosts() == [OVERPASS_HOST]


async def test_live_discovery_resolves_and_persists_stores(make_ctx) -> None:
    elements = [
        _node(1, 30.01, -97.01, name="Taco Bell", website="https://locations.tacobell.com/tx/a.html",
              **{"addr:housenumber": "100", "addr:street": "Main St"}),
        _node(2, 30.02, -97.02, website="https://locations.tacobell.com/tx/b.html"),
        _node(3, 30.03, -97.03, name="Taco Bell"),
        _node(4, 30.04, -97.04, website="https://locations.tacobell.com/tx/none.html"),
        _node(5, 30.05, -97.05, website="https://locations.tacobell.com/tx/down.html"),
    ]
    pages = {
        "https://locations.tacobell.com/tx/a.html": httpx.Response(
            200, text='<script>{"menu":"https://www.tacobell.com/food?store=031234"}</script>'
        ),
        "https://locations.tacobell.com/tx/b.html": httpx.Response(
            200, text='<div id="Core" data-code="029876"></div>'
        ),
        "https://locations.tacobell.com/tx/none.html": httpx.Response(200, text="<html>Coming soon</html>"),
        "https://locations.tacobell.com/tx/down.html": httpx.ConnectError("timed out"),
    }
    store = FakeCacheStore()
    handler = _overpass_and_pages(elements, pages)

    stores = await StoreDirectory(make_ctx(handler, store)).find_stores(CENTER, 10)

    assert stores == [
        StoreLocation("031234", "Taco Bell", "100 Main St", 30.01, -97.01),
        StoreLocation("029876", "Taco Bell", "", 30.02, -97.02),
    ]
    assert set(store.stores) == {"031234", "029876"}
    # Overpass once, then one fetch per element with a website (node 3 has none)
    assert handler.hosts().count(OVERPASS_HOST) == 1
    assert len(handler.requests) == 5


async def test_store_write_failure_does_not_drop_store(make_ctx) -> None:
    elements = [_node(1, 30.01, -97.01, website="https://locations.tacobell.com/tx/a.html")]
    pages = {"https://locations.tacobell.com/tx/a.html": httpx.Response(200, text='<div id="Core" data-code="031234">')}
    store = FakeCacheStore()
    store.fail_writes = True

    stores = await StoreDirectory(make_ctx(_overpass_and_pages(elements, pages), store)).find_stores(CENTER, 10)

    assert [s.store_id for s in stores] == ["031234"]
    assert store.stores == {}


async def test_duplicate_store_codes_collapse(make_ctx) -> None:
    elements = [
        _node(1, 30.01, -97.01, website="https://locations.tacobell.com/tx/a.html"),
        _node(2, 30.01, -97.01, website="https://locations.tacobell.com/tx/a.html"),
    ]
    pages = {"https://locations.tacobell.com/tx/a.html": httpx.Response(200, text='<div id="Core" data-code="031234">')}

    stores = await StoreDirectory(make_ctx(_overpass_and_pages(elements, pages))).find_stores(CENTER, 10)

    assert [s.store_id for s in stores] == ["031234"]


async def test_malformed_website_does_not_abort_discovery(make_ctx) -> None:
    elements = [
        _node(1, 30.01, -97.01, website="http://store:notaport/"),
        _node(2, 30.02, -97.02, website="https://locations.tacobell.com/tx/a.html"),
    ]
    pages = {"https://locations.tacobell.com/tx/a.html": httpx.Response(200, text='<div id="Core" data-code="031234">')}

    stores = await StoreDirectory(make_ctx(_overpass_and_pages(elements, pages))).find_stores(CENTER, 10)

    assert [s.store_id for s in stores] == ["031234"]


class FlakyDirectory(StoreDirectory):
    """Resolution raises for one POI; the rest must still resolve."""

    async def resolve(self, poi):
        if poi.osm_id == 1:
            raise RuntimeError("unexpected page shape")
        return await super().resolve(poi)


async def test_one_failing_resolution_keeps_the_others(make_ctx) -> None:
    elements = [
        _node(1, 30.01, -97.01, website="https://locations.tacobell.com/tx/bad.html"),
        _node(2, 30.02, -97.02, website="https://locations.tacobell.com/tx/a.html"),
    ]
    pages = {"https://locations.tacobell.com/tx/a.html": httpx.Response(200, text='<div id="Core" data-code="031234">')}

    stores = await FlakyDirectory(make_ctx(_overpass_and_pages(elements, pages))).find_stores(CENTER, 10)

    assert [s.store_id for s in stores] == ["031234"]


async def test_overpass_failure_yields_no_stores(make_ctx) -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(504, text="Gateway Timeout")

    stores = await StoreDirectory(make_ctx(handler)).find_stores(CENTER, 10)

    assert stores == []


async def test_cache_read_failure_falls_back_to_live_discovery(make_ctx) -> None:
    store = FakeCacheStore([StoreLocation("031234", "Taco Bell", "", 30.0, -97.0)])
    store.fail_reads = True
    handler = _overpass_and_pages([], {})

    stores = await StoreDirectory(make_ctx(handler, store)).find_stores(CENTER, 10)

    assert stores == []
    assert handler.hosts() == [OVERPASS_HOST]


async def test_overpass_request_encodes_chain_and_radius(make_ctx) -> None:
    handler = _overpass_and_pages([], {})

    await OverpassClient(make_ctx(handler)).search(CENTER, 10)

    query = handler.requests[0].url.params["data"]
    assert '["amenity"="fast_food"]' in query
    assert '["name"="Taco Bell"]' in query
    assert "around:16093,30.0,-97.0" in query


def test_build_query_strips_quotes_from_chain_name() -> None:
    query = build_query('Taco "Bell"', CENTER, 1)
    assert '["name"="Taco Bell"]' in query


def test_parse_elements_uses_center_for_ways() -> None:
    pois = parse_elements(
        {
            "elements": [
                {"type": "way", "id": 7, "center": {"lat": 30.1, "lon": -97.1}, "tags": {"name": "Taco Bell"}},
                {"type": "node", "id": 8, "tags": {}},
                "garbage",
                {"type": "way", "id": 9, "center": "bogus"},
                {"type": "node", "id": 10, "lat": 1.0, "lon": 2.0},
            ]
        }
    )
    assert [(p.osm_id, p.latitude, p.longitude) for p in pois] == [(7, 30.1, -97.1), (10, 1.0, 2.0)]


def test_build_address() -> None:
    assert build_address({"addr:housenumber": "12", "addr:street": "Oak Ave"}) == "12 Oak Ave"
    assert build_address({"addr:street": "Oak Ave"}) == "Oak Ave"
    assert build_address({}) == ""
