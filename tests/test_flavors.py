from pantrii.services.flavors import (
    FLAVOR_CATEGORIES,
    FLAVOR_IDS,
    detect_flavors_from_ingredients,
    suggest_flavor_tags,
)


def test_flavor_categories() -> None:
    assert len(FLAVOR_CATEGORIES) == 10
    assert {"sweet", "umami", "tangy"} <= FLAVOR_IDS


def test_exact_matches_count_fully() -> None:
    detection = detect_flavors_from_ingredients(["Honey", "lemon"])
    assert detection.detected_flavors == ["sweet", "aromatic", "sour", "tangy"]
    assert detection.flavor_confidence["sweet"] == 0.5
    assert detection.confidence == 0.5


def test_partial_matches_count_half() -> None:
    detection = detect_flavors_from_ingredients(["chicken thighs"])
    assert detection.detected_flavors == ["umami"]
    assert detection.flavor_confidence["umami"] == 0.5


def test_weak_signals_fall_below_threshold() -> None:
    detection = detect_flavors_from_ingredients(["honey", "x1", "x2", "x3", "x4", "x5"])
    assert detection.detected_flavors == []
    assert detection.confidence == 0


def test_no_matches() -> None:
    detection = detect_flavors_from_ingredients(["unobtainium"])
    assert detection.detected_flavors == []
    assert detection.confidence == 0.0


def test_suggest_flavor_tags_limits_results() -> None:
    assert suggest_flavor_tags(["honey", "lemon"], 2) == ["sweet", "aromatic"]
    assert len(suggest_flavor_tags(["honey", "lemon"])) == 3
