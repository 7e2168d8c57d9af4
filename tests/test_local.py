import pytest

from audit_engine.local import (
    LocalCompetitor,
    average_rating,
    find_business,
    flatten_pack,
    local_component_scores,
    local_visibility_score,
    position_score,
)


def test_flatten_expands_nested_items(local_pack):
    competitors = flatten_pack([{"type": "local_pack", "items": local_pack[:2]}, local_pack[2], "junk"])
    assert [c.position for c in competitors] == [1, 2, 3]
    assert [c.name for c in competitors] == ["Rival Plumbing", "Acme Plumbing Paris", "Other Plumbers"]
    assert competitors[0].rating == 4.8
    assert competitors[0].reviews == 120
    assert competitors[1].website is None


def test_find_business_matches_by_containment(local_pack):
    competitors = flatten_pack(local_pack)
    assert find_business(competitors, "acme plumbing") == 1
    assert find_business(competitors, "ACME PLUMBING PARIS 1ER") == 1
    assert find_business(competitors, "Nobody") == -1
    assert find_business(competitors, "") == -1


@pytest.mark.parametrize("index, points", [(0, 50), (1, 40), (2, 30), (3, 20), (4, 20), (5, 10), (9, 10), (-1, 0)])
def test_position_points(index, points):
    assert position_score(index) == points


def test_component_scores(local_pack):
    competitors = flatten_pack(local_pack)
    components = local_component_scores(1, competitors[1])
    assert components == {"position": 40.0, "rating": 21.0, "reviews": 2.25, "completeness": 8.0}
    assert local_visibility_score(components) == 71


def test_perfect_listing_scores_100():
    business = LocalCompetitor(position=1, name="Acme", rating=5.0, reviews=250, address="1 Main St",
                               phone="555", website="https://acme.example", category="Plumber")
    assert local_visibility_score(local_component_scores(0, business)) == 100


def test_business_not_found_scores_zero():
    components = local_component_scores(-1, None)
    assert set(components.values()) == {0.0}
    assert local_visibility_score(components) == 0


def test_average_rating_skips_unrated():
    competitors = [LocalCompetitor(1, "a", rating=4.0), LocalCompetitor(2, "b"), LocalCompetitor(3, "c", rating=5.0)]
    assert average_rating(competitors) == 4.5
    assert average_rating([]) is None
