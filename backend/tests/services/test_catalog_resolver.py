"""Catalog Resolver — signing fan-out, failure isolation, catalog states."""

import asyncio
import uuid

import pytest

from matsuri.core.domain_types import CatalogState, FundingType, TierType
from matsuri.core.errors import ResourceNotFoundError
from matsuri.core.funding import NO_MINIMUM
from matsuri.services.catalog_resolver import (
    STORE_UNAVAILABLE_MESSAGE, CatalogResolver,
)

LEGACY = "https://old.host/storage/v1/object/public/festival-images/festival-images/a.jpg"


@pytest.fixture
def resolver(fake_store, fake_storage, settings):
    return CatalogResolver(fake_store, fake_storage, settings)


async def test_store_failure_is_distinct_from_empty(resolver, fake_store):
    empty = await resolver.resolve()
    assert empty.state == CatalogState.EMPTY
    assert empty.error is None

    fake_store.fail_query = True
    failed = await resolver.resolve()
    assert failed.state == CatalogState.STORE_ERROR
    assert failed.festivals == []
    assert failed.error == STORE_UNAVAILABLE_MESSAGE


async def test_newest_first(resolver, fake_store):
    older = fake_store.add_festival(name="Older")
    newer = fake_store.add_festival(name="Newer")

    result = await resolver.resolve()

    assert result.state == CatalogState.POPULATED
    assert [r.festival.id for r in result.festivals] == [newer.id, older.id]


async def test_every_encoding_signs_the_same_path(resolver, fake_store, fake_storage):
    for ref in (LEGACY, "a.jpg", "festival-images/a.jpg"):
        fake_store.add_festival(image_url=ref)

    result = await resolver.resolve()

    urls = {r.display_image_url for r in result.festivals}
    assert len(urls) == 1
    signed = [c for c in fake_storage.calls if c[0] == "sign"]
    assert {path for _, _, path in signed} == {"festival-images/a.jpg"}


async def test_one_signing_failure_does_not_affect_others(resolver, fake_store, fake_storage):
    fake_storage.unsignable.add("festival-images/broken.jpg")
    fake_store.add_festival(name="Good", image_url="good.jpg")
    fake_store.add_festival(name="Broken", image_url="broken.jpg")
    fake_store.add_festival(name="Bare", image_url=None)

    result = await resolver.resolve()

    by_name = {r.festival.name: r.display_image_url for r in result.festivals}
    assert by_name["Broken"] == ""
    assert by_name["Bare"] == ""
    assert by_name["Good"].startswith("https://")


async def test_malformed_signed_url_becomes_placeholder(resolver, fake_store, fake_storage):
    fake_storage.malformed.add("festival-images/odd.jpg")
    fake_store.add_festival(image_url="odd.jpg")

    result = await resolver.resolve()

    assert result.festivals[0].display_image_url == ""


async def test_absent_image_never_calls_storage(resolver, fake_store, fake_storage):
    fake_store.add_festival(image_url=None)
    await resolver.resolve()
    assert fake_storage.calls == []


async def test_signing_runs_concurrently(fake_store, settings):
    in_flight = 0
    peak = 0

    class SlowStorage:
        async def sign(self, bucket, path, ttl_seconds):
            nonlocal in_flight, peak
            in_flight += 1
            peak = max(peak, in_flight)
            await asyncio.sleep(0.01)
            in_flight -= 1
            return f"https://signed.test/{path}"

    for i in range(5):
        fake_store.add_festival(image_url=f"img{i}.jpg")

    await CatalogResolver(fake_store, SlowStorage(), settings).resolve()

    assert peak == 5


async def test_minimum_and_funding_figures(resolver, fake_store):
    festival = fake_store.add_festival(
        funding_type=FundingType.GOAL_BASED, funding_goal=200_000, current_funding=50_000,
    )
    fake_store.add_tier(festival.id, amount=30_000)
    fake_store.add_tier(festival.id, amount=10_000)
    fake_store.add_tier(festival.id, name="Goods", type=TierType.IN_KIND, amount=0)
    bare = fake_store.add_festival(name="No tiers")

    result = await resolver.resolve()

    by_id = {r.festival.id: r for r in result.festivals}
    assert by_id[festival.id].minimum_sponsorship == 10_000
    assert by_id[festival.id].funding.percentage == 25.0
    assert by_id[bare.id].minimum_sponsorship is NO_MINIMUM


async def test_search_and_region_are_passed_through(resolver, fake_store):
    fake_store.add_festival(name="祇園祭", region="関西")
    fake_store.add_festival(name="Nebuta", region="東北")

    result = await resolver.resolve(search="祇園", region="関西")

    assert [r.festival.name for r in result.festivals] == ["祇園祭"]


async def test_regions_degrade_to_empty(resolver, fake_store):
    fake_store.add_festival(region="関西")
    fake_store.add_festival(region="関東")
    assert await resolver.list_regions() == sorted(["関東", "関西"])

    fake_store.fail_query = True
    assert await resolver.list_regions() == []


async def test_detail_includes_tiers_and_sponsors(resolver, fake_store):
    festival = fake_store.add_festival(image_url="a.jpg")
    tier = fake_store.add_tier(festival.id)
    await fake_store.insert_sponsor({
        "company_name": "Acme", "logo_url": "https://cdn/l.png",
        "sponsorship_tier_id": tier.id, "festival_id": festival.id,
    })

    detail = await resolver.resolve_festival(festival.id)

    assert [t.id for t in detail.tiers] == [tier.id]
    assert detail.sponsors[0].tier_name == "Gold"
    assert detail.festival.display_image_url.startswith("https://")


async def test_detail_unknown_festival(resolver):
    with pytest.raises(ResourceNotFoundError):
        await resolver.resolve_festival(uuid.uuid4())
