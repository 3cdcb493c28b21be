"""Deduce the search token and search hints from the word being completed."""

from ..models import CompletionOptions


def remove_trailing_char(text: str, char: str) -> tuple[str, bool]:
    """Strip one trailing char. Returns (text, removed)."""
    if text and text[-1] == char:
        return text[:-1], True
    return text, False


def canonicalize_cursor_word(cursor_word: str) -> tuple[str, CompletionOptions]:
    """Return the canonical search token and the options hinted by the word.

    Leading quote and dashes are dropped. Up to three trailing '?' widen
    the search (name substring, then location, then description) and one
    trailing '+' asks for every match, e.g. "--log??+" searches for "log"
    in flag names and locations and returns all matches.
    """
    token = cursor_word
    if not token:
        return token, CompletionOptions()

    if token and token[0] == '"':
        token = token[1:]
    while token and token[0] == "-":
        token = token[1:]

    question_marks = 0
    plusses = 0
    while True:
        if question_marks < 3:
            token, removed = remove_trailing_char(token, "?")
            if removed:
                question_marks += 1
                continue
        if plusses < 1:
            token, removed = remove_trailing_char(token, "+")
            if removed:
                plusses += 1
                continue
        break

    if not token:
        # Nothing left to search for; hints are meaningless
        return token, CompletionOptions()

    options = CompletionOptions(
        flag_name_substring_search=question_marks > 0,
        flag_location_substring_search=question_marks > 1,
        flag_description_substring_search=question_marks > 2,
        return_all_matching_flags=plusses > 0,
    )
    return token, options
