from rsvp_pacer.tokenization import average_word_length, tokenize_words


def test_tokenize_words_returns_offsets():
    """Tokens keep punctuation and carry exact source offsets."""
    text = "Hello, world!  It's\tsunny today."
    tokens = tokenize_words(text)

    assert [token.text for token in tokens] == ["Hello,", "world!", "It's", "sunny", "today."]
    assert tokens[0].start_char == 0
    assert tokens[0].end_char == 6
    assert text[tokens[-1].start_char : tokens[-1].end_char] == "today."


def test_tokenize_words_respects_range():
    """Tokenizing a range reports absolute offsets."""
    text = "one two three four"
    tokens = tokenize_words(text, 4, 13)

    assert [token.text for token in tokens] == ["two", "three"]
    assert tokens[0].start_char == 4


def test_average_word_length():
    """Average word length is 0 for blank text."""
    assert average_word_length("ab abcd") == 3.0
    assert average_word_length("  ") == 0.0
