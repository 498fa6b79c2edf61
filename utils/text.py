"""
Text Processing Utilities
Handles text cleaning and search matching
"""

import re
import emoji


def shorten(text, max_length=50):
    """
    Shorten text for logging

    Args:
        text: Text to shorten
        max_length: Maximum length

    Returns:
        Shortened text with ellipsis if needed
    """
    if not isinstance(text, str):
        text = str(text)
    if len(text) <= max_length:
        return text
    return text[:max_length - 3] + "..."


def clean_text(text):
    """
    Remove emoji, newlines, and excessive whitespace

    Args:
        text: Text to clean

    Returns:
        Cleaned text
    """
    if not text:
        return ""
    text = emoji.replace_emoji(text, replace=" ")
    text = re.sub(r"\s+", " ", text).strip()
    return text


def normalize_search_text(text):
    """Lowercased, emoji-free, single-spaced text for substring search"""
    return clean_text(text).lower()


def matches_query(query, *fields):
    """
    Case-insensitive substring match of a query against any field

    Args:
        query: Free-text query; blank matches everything
        *fields: Candidate strings (None allowed)

    Returns:
        True if the normalized query occurs in any normalized field
    """
    needle = normalize_search_text(query)
    if not needle:
        return True
    return any(needle in normalize_search_text(field) for field in fields if field)
