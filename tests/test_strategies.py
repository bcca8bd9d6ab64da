import logging
import time

import pytest

from pillars import Pillar
from strategies import available_strategies, default_pipeline, get_strategy
from strategies.loose import LooseLabelStrategy
from strategies.strict import FieldSequence, StrictPatternStrategy

ATTRIBUTE_TEXT = (
    "Empatia 7.5, Pensamento Prático 6.0, Julgamento de Sistemas 8.0, "
    "Autoestima 5.5, Consciência de Papel 9.0, Autodireção 4.5"
)

REVERSED_MOTIVATORS = (
    "Teórico 71\n"
    "Regulador 30\n"
    "Altruísta 100\n"
    "Político 48\n"
    "Individualista 55\n"
    "Econômico 62\n"
    "Estética: 100 escala, valor 88"
)


def test_registry_builds_known_strategies():
    assert isinstance(get_strategy("strict", "style"), StrictPatternStrategy)
    assert isinstance(get_strategy("Loose", Pillar.MOTIVATORS), LooseLabelStrategy)
    assert available_strategies() == ["strict", "loose"]
    assert [s.name for s in default_pipeline(Pillar.ATTRIBUTES)] == ["strict", "loose"]


def test_registry_rejects_unknown_strategy():
    with pytest.raises(ValueError):
        get_strategy("fuzzy", "style")


def test_strict_style_labeled_letters():
    result = StrictPatternStrategy(Pillar.STYLE).extract("D: 75 I: 40 S: 60 C: 30")
    assert result is not None
    assert result.found
    assert result.provenance.value == "strict"
    assert result.scores == {"d": 75, "i": 40, "s": 60, "c": 30}


def test_strict_style_after_disc_heading():
    text = "Gráfico DISC Natural: 81 - 22 - 47 - 65"
    result = StrictPatternStrategy(Pillar.STYLE).extract(text)
    assert result.scores == {"d": 81, "i": 22, "s": 47, "c": 65}


def test_strict_rejects_out_of_domain_match():
    assert StrictPatternStrategy(Pillar.STYLE).extract("DISC D: 120 I: 40 S: 60 C: 30") is None


def test_strict_motivators_labeled_sequence():
    text = (
        "Estético: 62 Econômico: 71 Individualista: 45 Político: 80 "
        "Altruísta: 33 Regulador: 58 Teórico: 90"
    )
    result = StrictPatternStrategy(Pillar.MOTIVATORS).extract(text)
    assert result.scores == {
        "aesthetic": 62,
        "economic": 71,
        "individualist": 45,
        "political": 80,
        "altruistic": 33,
        "regulatory": 58,
        "theoretical": 90,
    }


def test_strict_motivators_english_labels_with_decimals():
    text = (
        "Aesthetic: 61,6 Economic: 70.4 Individualist: 45 Political: 80 "
        "Altruistic: 33 Regulatory: 58 Theoretical: 90"
    )
    result = StrictPatternStrategy(Pillar.MOTIVATORS).extract(text)
    assert result.scores["aesthetic"] == 62
    assert result.scores["economic"] == 70


def test_strict_attributes_round_to_one_decimal():
    result = StrictPatternStrategy(Pillar.ATTRIBUTES).extract(ATTRIBUTE_TEXT.replace("7.5", "7,46"))
    assert result.scores == {
        "empathy": 7.5,
        "practical_thinking": 6.0,
        "systems_judgment": 8.0,
        "self_esteem": 5.5,
        "role_awareness": 9.0,
        "self_direction": 4.5,
    }
    assert all(result.resolved.values())


def test_strict_returns_none_for_empty_text():
    for pillar in Pillar:
        assert StrictPatternStrategy(pillar).extract("") is None


def test_strict_does_not_match_out_of_order_layout():
    assert StrictPatternStrategy(Pillar.MOTIVATORS).extract(REVERSED_MOTIVATORS) is None


def test_loose_motivators_avoid_scale_decoy():
    result = LooseLabelStrategy(Pillar.MOTIVATORS).extract(REVERSED_MOTIVATORS)
    assert result.found
    assert result.provenance.value == "loose"
    assert result.scores == {
        "aesthetic": 88,
        "economic": 62,
        "individualist": 55,
        "political": 48,
        "altruistic": 100,
        "regulatory": 30,
        "theoretical": 71,
    }


def test_loose_motivators_scope_to_anchor_section():
    text = (
        "Índice\nPolítico 12 página 3\n"
        + "texto introdutório " * 20
        + "\nResumo Executivo dos Valores Motivacionais\n"
        + REVERSED_MOTIVATORS
    )
    strategy = LooseLabelStrategy(Pillar.MOTIVATORS)
    assert strategy.scope(text).startswith("Resumo Executivo dos Valores Motivacionais")
    assert strategy.extract(text).scores["political"] == 48


def test_loose_without_anchor_scans_whole_text():
    strategy = LooseLabelStrategy(Pillar.MOTIVATORS)
    assert strategy.scope(REVERSED_MOTIVATORS) == REVERSED_MOTIVATORS


def test_loose_partial_attributes_report_unresolved_fields():
    text = "Autodireção 6.2\nConsciência de Papel 7.1\nAutoestima 8.4\nEmpatia 5.9"
    assert StrictPatternStrategy(Pillar.ATTRIBUTES).extract(text) is None

    result = LooseLabelStrategy(Pillar.ATTRIBUTES).extract(text)
    assert result.found
    assert result.scores == {
        "empathy": 5.9,
        "self_esteem": 8.4,
        "role_awareness": 7.1,
        "self_direction": 6.2,
    }
    assert result.unresolved_fields == ["practical_thinking", "systems_judgment"]
    assert result.display_scores()["practical_thinking"] == 5.0


def test_loose_below_threshold_returns_none():
    text = "Empatia 6.1\nAutoestima 7.2\nAutodireção 8.3"
    assert LooseLabelStrategy(Pillar.ATTRIBUTES).extract(text) is None


def test_loose_style_clamps_out_of_domain_value():
    text = "Conformidade 640\nEstabilidade 50\nInfluência 35\nDominância 82"
    assert StrictPatternStrategy(Pillar.STYLE).extract(text) is None
    result = LooseLabelStrategy(Pillar.STYLE).extract(text)
    assert result.scores == {"d": 82, "i": 35, "s": 50, "c": 100}


MOTIVATOR_PROSE_WITHOUT_THEORETICAL = (
    "O perfil Estético 60 aparece junto ao Econômico 55, ao Individualista 40, "
    "ao Político 70, ao Altruísta 35 e ao Regulador 45 nesta seção. "
)


def test_strict_gives_up_quickly_when_last_label_is_missing():
    text = MOTIVATOR_PROSE_WITHOUT_THEORETICAL * 20
    started = time.perf_counter()
    result = StrictPatternStrategy(Pillar.MOTIVATORS).extract(text)
    elapsed = time.perf_counter() - started
    assert result is None
    assert elapsed < 1.0


def test_strict_attributes_give_up_quickly_when_last_label_is_missing():
    text = ATTRIBUTE_TEXT.replace(", Autodireção 4.5", ". ") * 40
    started = time.perf_counter()
    assert StrictPatternStrategy(Pillar.ATTRIBUTES).extract(text) is None
    assert time.perf_counter() - started < 1.0


def test_strict_labeled_sequence_rejects_distant_next_label():
    filler = "texto descritivo sem valores " * 20
    text = f"D: 75 {filler} I: 40 S: 60 C: 30"
    assert StrictPatternStrategy(Pillar.STYLE).extract(text) is None


def test_field_sequence_requires_one_gap_per_step_boundary():
    with pytest.raises(ValueError):
        FieldSequence(r"a(\d)", r"b(\d)", r"c(\d)", gaps=(10,))


def test_field_sequence_yields_groups_in_label_order():
    sequence = FieldSequence(r"a(\d)", r"b(\d)", gaps=5)
    assert list(sequence.iter_groups("a1 b2 ... a3 xxxxxxxxx b4")) == [("1", "2")]


def test_loose_logs_resolved_counts(caplog):
    text = "Empatia 6.1\nAutoestima 7.2\nAutodireção 8.3"
    with caplog.at_level(logging.DEBUG):
        assert LooseLabelStrategy(Pillar.ATTRIBUTES).extract(text) is None
    assert "Picked 6.1 for empatia from 1 candidates" in caplog.text
    assert "attributes: loose extraction resolved 3/6 fields (needs 4)" in caplog.text
