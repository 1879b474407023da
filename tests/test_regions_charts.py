"""Tests for region resolution and award chart lookup."""

from award_compass.charts import ChartLookup
from award_compass.models import AirportRegionMapping, AwardChart, Region
from award_compass.regions import RegionResolver

from conftest import AADVANTAGE, ANA, EMIRATES, JAL, UNITED


# ---------------------------------------------------------------------------
# RegionResolver
# ---------------------------------------------------------------------------

def test_region_for_single_airport(repo):
    resolver = RegionResolver(repo.regions, repo.region_mappings)
    assert resolver.region_for(ANA, {"NRT"}).name == "Japan"
    assert resolver.region_for(ANA, {"LHR"}).code == "EUROPE"


def test_region_for_any_member_suffices(repo):
    """United only maps EWR in New York; the NYC metro still resolves."""
    resolver = RegionResolver(repo.regions, repo.region_mappings)
    region = resolver.region_for(UNITED, ["JFK", "EWR", "LGA"])
    assert region.id == 20
    assert region.program_id == UNITED


def test_regions_are_private_per_program(repo):
    resolver = RegionResolver(repo.regions, repo.region_mappings)
    ana = resolver.region_for(ANA, {"JFK"})
    aa = resolver.region_for(AADVANTAGE, {"JFK"})
    assert ana.name == aa.name == "North America"
    assert ana.id != aa.id


def test_region_for_unmapped(repo):
    resolver = RegionResolver(repo.regions, repo.region_mappings)
    assert resolver.region_for(EMIRATES, {"NRT", "HND"}) is None
    assert resolver.region_for(JAL, {"JFK"}) is None
    assert resolver.region_for(ANA, set()) is None
    assert resolver.region_for(999, {"JFK"}) is None


def test_region_for_first_mapping_row_wins():
    regions = [Region(1, 7, "East"), Region(2, 7, "West")]
    mappings = [
        AirportRegionMapping("BBB", 2, 7),
        AirportRegionMapping("AAA", 1, 7),
    ]
    resolver = RegionResolver(regions, mappings)
    assert resolver.region_for(7, ["AAA", "BBB"]).name == "West"


def test_mapping_to_unknown_region_is_ignored():
    resolver = RegionResolver([Region(1, 7, "East")], [AirportRegionMapping("AAA", 42, 7)])
    assert resolver.region_for(7, {"AAA"}) is None


def test_regions_for_program(repo):
    resolver = RegionResolver(repo.regions, repo.region_mappings)
    assert [r.name for r in resolver.regions_for_program(ANA)] == ["North America", "Japan", "Europe"]
    assert resolver.regions_for_program(JAL) == []


# ---------------------------------------------------------------------------
# ChartLookup
# ---------------------------------------------------------------------------

def test_chart_for_exact_match(repo):
    lookup = ChartLookup(repo.award_charts)
    chart = lookup.chart_for(ANA, 10, 11, "business")
    assert chart.min_miles == 75_000
    assert chart.is_one_way is False


def test_chart_for_direction_matters(repo):
    lookup = ChartLookup(repo.award_charts)
    assert lookup.chart_for(UNITED, 20, 21, "business") is not None
    assert lookup.chart_for(UNITED, 21, 20, "business") is None


def test_chart_for_cabin_mismatch(repo):
    lookup = ChartLookup(repo.award_charts)
    assert lookup.chart_for(ANA, 10, 11, "first") is None
    assert lookup.chart_for(ANA, 10, 11, "premium_economy") is None


def test_duplicate_rows_first_in_enumeration_order_wins():
    # Duplicate keys are possible in the data; which row wins is arbitrary.
    first = AwardChart(1, 5, 1, 2, "business", 70_000, 70_000)
    second = AwardChart(2, 5, 1, 2, "business", 55_000, 55_000)

    assert ChartLookup([first, second]).chart_for(5, 1, 2, "business") is first
    assert ChartLookup([second, first]).chart_for(5, 1, 2, "business") is second


def test_charts_for_program_ordering(repo):
    lookup = ChartLookup(repo.award_charts)
    charts = lookup.charts_for_program(ANA)
    assert [c.id for c in charts] == [1, 2, 3]
    assert lookup.charts_for_program(JAL) == []
