from utils import clean_text, matches_query, normalize_search_text, shorten


def test_clean_text_strips_emoji_and_whitespace():
    assert clean_text("Taco 🌮  Tuesday\n specials") == "Taco Tuesday specials"
    assert clean_text(None) == ""


def test_normalize_search_text():
    assert normalize_search_text("  Harbor   TAP ") == "harbor tap"


def test_matches_query():
    assert matches_query("pub QUIZ", "Harbor Tap Trivia", "Weekly pub quiz with prizes")
    assert not matches_query("karaoke", "Harbor Tap Trivia", None)
    assert matches_query("   ", "anything")
    assert matches_query(None)


def test_shorten():
    assert shorten("short") == "short"
    assert shorten("x" * 60, max_length=10) == "xxxxxxx..."
