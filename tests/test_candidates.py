from candidates import (
    CandidateWeights,
    NumericCandidate,
    find_labeled_number,
    labeled_windows,
    pick_best_candidate,
    scan_candidates,
)
from pillars import ATTRIBUTE_DOMAIN, PERCENT_DOMAIN


def test_scan_collects_every_number_with_distance():
    candidates = scan_candidates("Empatia: 7.5 e 6,0", ["empatia"])
    assert candidates == [NumericCandidate(7.5, 9), NumericCandidate(6.0, 15)]


def test_scan_is_case_insensitive_and_covers_all_occurrences():
    text = "EMPATIA 7 ... more text ... empatia 8"
    values = [c.value for c in scan_candidates(text, ["empatia"], window_size=10)]
    assert values == [7, 8]


def test_scan_merges_synonyms():
    text = "Aesthetic 64"
    values = [c.value for c in scan_candidates(text, ["estética", "aesthetic"])]
    assert values == [64]


def test_stop_label_truncates_window():
    text = "Estética 62 Econômico 71"
    values = [c.value for c in scan_candidates(text, ["estética"], stop_labels=["econômico"])]
    assert values == [62]


def test_stop_label_uses_earliest_occurrence():
    text = "Estética 62 Teórico 90 Econômico 71"
    windows = labeled_windows(text, ["estética"], stop_labels=["econômico", "teórico"])
    assert windows == [(0, "Estética 62 ")]


def test_missing_label_returns_empty_list():
    assert scan_candidates("no labels here 42", ["empatia"]) == []
    assert scan_candidates("", ["empatia"]) == []


def test_decoy_scale_marker_is_skipped_when_real_value_exists():
    text = "Estética: 100 escala, valor 73"
    assert find_labeled_number(text, ["estética"], PERCENT_DOMAIN) == 73


def test_decoy_after_real_value_is_skipped():
    text = "Estética: 88 (escala até 100)"
    assert find_labeled_number(text, ["estética"], PERCENT_DOMAIN) == 88


def test_lone_decoy_is_accepted_as_last_resort():
    assert find_labeled_number("Altruísta 50", ["altruísta"], PERCENT_DOMAIN) == 50
    assert pick_best_candidate([NumericCandidate(100, 12)], PERCENT_DOMAIN) == 100


def test_out_of_domain_candidates_lose():
    candidates = [NumericCandidate(250, 3), NumericCandidate(70, 30)]
    assert pick_best_candidate(candidates, PERCENT_DOMAIN) == 70


def test_low_values_get_mild_penalty():
    candidates = [NumericCandidate(3, 2), NumericCandidate(40, 20)]
    assert pick_best_candidate(candidates, PERCENT_DOMAIN) == 40
    # the penalty is mild: a much closer low value still wins
    candidates = [NumericCandidate(3, 2), NumericCandidate(40, 80)]
    assert pick_best_candidate(candidates, PERCENT_DOMAIN) == 3


def test_attribute_domain_rejects_percent_scale_values():
    candidates = [NumericCandidate(100, 4), NumericCandidate(7.5, 20)]
    assert pick_best_candidate(candidates, ATTRIBUTE_DOMAIN) == 7.5


def test_ties_keep_scan_order():
    candidates = [NumericCandidate(60, 5), NumericCandidate(61, 5)]
    assert pick_best_candidate(candidates, PERCENT_DOMAIN) == 60


def test_empty_candidates_return_none():
    assert pick_best_candidate([], PERCENT_DOMAIN) is None


def test_custom_weights_can_disable_decoys():
    candidates = [NumericCandidate(100, 10), NumericCandidate(73, 28)]
    weights = CandidateWeights(decoy_values=())
    assert pick_best_candidate(candidates, PERCENT_DOMAIN, weights) == 100


def test_low_value_penalty_scales_with_attribute_domain():
    assert PERCENT_DOMAIN.low_value_ceiling == 5
    assert ATTRIBUTE_DOMAIN.low_value_ceiling == 0.5
    assert find_labeled_number("Autodireção 4.5 / 10", ["autodireção"], ATTRIBUTE_DOMAIN) == 4.5
