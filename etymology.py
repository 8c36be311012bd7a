import re
from dataclasses import dataclass
from typing import Optional, Union
from urllib.parse import quote

import requests

from contractions import expand_contraction

API_BASE = "https://www.dictionaryapi.com/api/v3/references/collegiate/json"

NO_ETYMOLOGY = "No etymology found"


class LookupFailed(Exception):
    """Raised when the dictionary API can't be reached or answers badly."""


# -----------------------------
# RESULTS
# -----------------------------

@dataclass(frozen=True)
class Found:
    word: str
    etymology: str
    expanded_form: Optional[str] = None

    def to_dict(self):
        return {
            "word": self.word,
            "etymology": self.etymology,
            "expanded_form": self.expanded_form,
        }


@dataclass(frozen=True)
class NotFound:
    word: str
    error: str

    def to_dict(self):
        return {
            "word": self.word,
            "error": self.error,
        }


LookupResult = Union[Found, NotFound]


# -----------------------------
# MERRIAM-WEBSTER LOOKUP
# -----------------------------

def build_url(word: str) -> str:
    return f"{API_BASE}/{quote(word, safe='')}"


def fetch_entries(word, api_key, timeout=None) -> list:
    """
    Query the Collegiate API for a word.
    Returns the list of entries (possibly empty). Unknown words come back
    as a list of spelling suggestions, which are plain strings.
    """
    try:
        r = requests.get(build_url(word), params={"key": api_key}, timeout=timeout)
        r.raise_for_status()
        data = r.json()
    except requests.RequestException as e:
        raise LookupFailed(f"Failed to fetch etymology for {word}") from e

    if not isinstance(data, list):
        return []
    return data


def _flatten_fragments(fragments):
    """
    Collect markup strings from an "et" field.
    Each fragment is a [label, payload] pair; the payload is either a
    markup string or another list of pairs (supplemental notes).
    """
    out = []
    for fragment in fragments:
        if isinstance(fragment, str):
            out.append(fragment)
        elif isinstance(fragment, list) and len(fragment) == 2:
            payload = fragment[1]
            if isinstance(payload, str):
                out.append(payload)
            elif isinstance(payload, list):
                out.extend(_flatten_fragments(payload))
    return out


def extract_etymology(entries) -> Optional[str]:
    """
    Return the etymology markup of the first entry that has one, joined
    into one whitespace-collapsed string, or None.
    """
    for entry in entries:
        if not isinstance(entry, dict) or not entry.get("et"):
            continue

        joined = " ".join(_flatten_fragments(entry["et"]))
        etymology = re.sub(r"\s+", " ", joined).strip()
        if etymology:
            return etymology

    return None


def lookup_etymology(word, api_key, timeout=None) -> LookupResult:
    """
    Look up one word, falling back to the expanded form for contractions
    ("don't" -> "do not") when the word itself yields nothing.
    """
    etymology = None
    primary_error = None

    try:
        etymology = extract_etymology(fetch_entries(word, api_key, timeout))
    except LookupFailed as e:
        primary_error = str(e)

    if etymology is None:
        expanded_form = expand_contraction(word)
        if expanded_form:
            try:
                fallback = extract_etymology(fetch_entries(expanded_form, api_key, timeout))
            except LookupFailed as e:
                return NotFound(word, str(e))

            if fallback is not None:
                return Found(word, fallback, expanded_form)

    if etymology is not None:
        return Found(word, etymology)

    if primary_error:
        return NotFound(word, primary_error)

    return NotFound(word, NO_ETYMOLOGY)


def split_words(text: str) -> list[str]:
    return [w for w in text.lower().split() if w]


def lookup_words(text, api_key, timeout=None) -> list[LookupResult]:
    """
    Look up every word of a free-text submission, one after another.
    A failed word never stops the rest of the batch.
    """
    return [lookup_etymology(word, api_key, timeout) for word in split_words(text)]
