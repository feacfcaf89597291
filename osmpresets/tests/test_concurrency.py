"""
Tests that one catalog can serve reads from several threads at once.
"""

from concurrent.futures import ThreadPoolExecutor

from osmpresets.inheritance import inherited_value
from osmpresets.matching import best_match_with_score
from osmpresets.search import features_matching_text

QUERIES = [
    ({"shop": "supermarket"}, "area", False),
    ({"shop": "supermarket", "brand:wikidata": "Q41171", "name": "Aldi"}, "area", True),
    ({"shop": "supermarket", "size": "big"}, "area", False),
    ({"amenity": "bench"}, "vertex", False),
    ({"building": "retail", "shop": "books"}, "area", True),
    ({}, "point", True),
    ({"highway": "primary"}, "line", False),
]
SEARCHES = [("market", None), ("aldi", "fr"), ("aldi", "us"), ("seat", None)]
WALKS = ["shop/supermarket/big", "amenity/bench", "highway/primary"]
IDS = ["shop", "shop/supermarket/aldi-4f1a", "shop/bakery"]


def _run_reads(catalog):
    matches = []
    for tags, geometry, include_supplemental in QUERIES:
        feature, score = best_match_with_score(catalog, tags, geometry, include_supplemental)
        matches.append((feature.feature_id if feature is not None else None, score))
    searches = [[f.feature_id for f in features_matching_text(catalog, text, country)] for text, country in SEARCHES]
    walks = [(inherited_value(catalog, fid, "name"), inherited_value(catalog, fid, "icon")) for fid in WALKS]
    lookups = [catalog.feature_for_id(fid) for fid in IDS]
    return matches, searches, walks, lookups


def _snapshot(index):
    return {key: [id(f) for f in features] for key, features in index.items()}


def test_parallel_reads_match_serial_reads(catalog):
    expected = _run_reads(catalog)
    before = [_snapshot(catalog.rebuild_index(flag)) for flag in (False, True)]

    with ThreadPoolExecutor(max_workers=8) as pool:
        results = list(pool.map(lambda _: _run_reads(catalog), range(64)))

    for result in results:
        assert result == expected

    after = [_snapshot(catalog.rebuild_index(flag)) for flag in (False, True)]
    assert after == before
    assert _snapshot(catalog.index(True)) == before[1]
