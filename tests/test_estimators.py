import math

import pytest

from rsvp_pacer.estimators import (
    LexicalComplexityEstimator,
    WordLengthEstimator,
    create_estimator,
    estimate,
)


def test_lexical_estimator_tracks_complexity():
    """Longer words and denser symbols score higher."""
    estimator = LexicalComplexityEstimator()
    simple = "a cat sat"
    complex_text = "Interdisciplinary (1987) CRISPR-Cas9 methodologies; notwithstanding!"

    simple_score = estimator.estimate(simple)
    complex_score = estimator.estimate(complex_text)

    assert 0 <= simple_score < complex_score <= 1


def test_estimate_known_values():
    """Blank text scores 0 and a plain five-letter word scores 0.25."""
    assert estimate("") == 0.0
    assert estimate("   ") == 0.0
    # avg word length 5 -> 0.5 * 0.5, no punctuation, digits or capitals
    assert estimate("brown") == pytest.approx(0.25)


def test_estimate_stays_in_range_for_dense_text():
    """Saturated feature densities stay within [0, 1]."""
    for text in ["9999999999", "ABCDEFGHIJKLMNOPQRSTUVWXYZ", "!!!...???", "x" * 500]:
        score = estimate(text)
        assert not math.isnan(score)
        assert 0.0 <= score <= 1.0


def test_word_length_estimator_maps_four_to_ten_characters():
    """Average word length maps linearly from 4..10 characters onto 0..1."""
    estimator = WordLengthEstimator()
    assert estimator.estimate("tiny cat") == 0.0
    assert estimator.estimate("sevenly") == pytest.approx(0.5)
    assert estimator.estimate("extraordinarily") == 1.0
    assert estimator.estimate("") == 0.0


def test_create_estimator_by_name():
    """The factory resolves known names and rejects unknown ones."""
    assert isinstance(create_estimator("lexical"), LexicalComplexityEstimator)
    assert isinstance(create_estimator(" Word_Length "), WordLengthEstimator)
    with pytest.raises(ValueError):
        create_estimator("unknown")
