"""
label_import/validators/similarity.py

Pure string-similarity helpers used for header matching, suggestions, and
duplicate detection. Inputs are plain strings; nothing here touches I/O.
"""

from __future__ import annotations

import re
from urllib.parse import urlparse

from label_import.reference.categories import Category

_TOKEN_SPLIT = re.compile(r"[^a-z0-9]+")

URL_FIELD_TYPES = frozenset({"website"})
NAME_FIELD_TYPES = frozenset({"name", "display_name"})


def levenshtein(a: str, b: str) -> int:
    """
    Edit distance with unit cost insertions, deletions and substitutions.
    """

    if a == b:
        return 0
    if not a:
        return len(b)
    if not b:
        return len(a)

    previous = list(range(len(b) + 1))
    for i, char_a in enumerate(a, start=1):
        current = [i]
        for j, char_b in enumerate(b, start=1):
            cost = 0 if char_a == char_b else 1
            current.append(
                min(
                    previous[j] + 1,
                    current[j - 1] + 1,
                    previous[j - 1] + cost,
                )
            )
        previous = current
    return previous[-1]


def similarity_ratio(a: str, b: str) -> float:
    """
    Return ``1 - distance / max_len`` in [0, 1].
    """

    max_length = max(len(a), len(b))
    if max_length == 0:
        return 1.0
    return 1.0 - levenshtein(a, b) / max_length


def length_ratio(a: str, b: str) -> float:
    longest = max(len(a), len(b))
    if longest == 0:
        return 1.0
    return min(len(a), len(b)) / longest


def contains_either(a: str, b: str) -> bool:
    return a in b or b in a


def score_category(value: str, category: Category) -> float:
    """
    Blended match score of a normalized user value against one category.

    Exact id 100, exact name 95, name containment 80-95 (length ratio above
    0.4), description containment 70, main category containment 60, else
    Levenshtein similarity above 0.6 scaled to 0-75 (name) or 0-80 (id).
    """

    category_id = category.category_id
    name = category.name.lower()
    description = category.description.lower()
    main_category = category.main_category.lower()

    if category_id == value:
        return 100.0
    if name == value:
        return 95.0
    if contains_either(name, value):
        ratio = length_ratio(name, value)
        return 80.0 + ratio * 15.0 if ratio > 0.4 else 0.0
    if value in description:
        return 70.0
    if contains_either(main_category, value):
        return 60.0

    score = 0.0
    name_similarity = similarity_ratio(value, name)
    if name_similarity > 0.6:
        score = name_similarity * 75.0
    id_similarity = similarity_ratio(value, category_id)
    if id_similarity > 0.6:
        score = max(score, id_similarity * 80.0)
    return score


def score_project(value: str, owner_project: str, display_name: str | None) -> float:
    """
    Blended match score of a normalized user value against one project.
    """

    project_name = owner_project.lower()
    display = (display_name or "").lower()

    if project_name == value or display == value:
        return 100.0
    if contains_either(project_name, value):
        ratio = length_ratio(project_name, value)
        return 80.0 + ratio * 20.0 if ratio > 0.5 else 0.0
    if display and contains_either(display, value):
        ratio = length_ratio(display, value)
        return 70.0 + ratio * 20.0 if ratio > 0.5 else 0.0

    score = 0.0
    project_similarity = similarity_ratio(value, project_name)
    if project_similarity > 0.6:
        score = project_similarity * 80.0
    if display:
        display_similarity = similarity_ratio(value, display)
        if display_similarity > 0.6:
            score = max(score, display_similarity * 70.0)
    return score


def rank_candidates(scored: list[tuple[str, float]], *, floor: float, limit: int = 5) -> list[str]:
    """
    Keep candidates scoring above ``floor``, best first, deduplicated.

    Ties keep their input order.
    """

    kept = [(candidate, score) for candidate, score in scored if score > floor]
    kept.sort(key=lambda item: item[1], reverse=True)

    ranked: list[str] = []
    for candidate, _ in kept:
        if candidate not in ranked:
            ranked.append(candidate)
        if len(ranked) >= limit:
            break
    return ranked


def url_hostname(url: str) -> str:
    candidate = url if url.startswith("http") else f"https://{url}"
    try:
        hostname = urlparse(candidate).hostname
    except ValueError:
        return url
    return hostname or url


def urls_similar(first: str, second: str) -> bool:
    """
    Compare hostnames, then without a leading ``www.``, then without the TLD.
    """

    domain_a = url_hostname(first)
    domain_b = url_hostname(second)
    if domain_a == domain_b:
        return True

    clean_a = domain_a.removeprefix("www.")
    clean_b = domain_b.removeprefix("www.")
    if clean_a == clean_b:
        return True

    stem_a = ".".join(clean_a.split(".")[:-1])
    stem_b = ".".join(clean_b.split(".")[:-1])
    return bool(stem_a) and bool(stem_b) and stem_a == stem_b


def github_owner(value: str) -> str:
    """
    Reduce a GitHub URL or bare org name to the lowercase org name.

    All GitHub URLs share one hostname, so only the org segment is compared.
    """

    candidate = value.strip().lower()
    if "github.com" not in candidate:
        return candidate.strip("/")
    if not candidate.startswith("http"):
        candidate = f"https://{candidate}"
    try:
        segments = [segment for segment in urlparse(candidate).path.split("/") if segment]
    except ValueError:
        return candidate
    return segments[0] if segments else candidate


def tokenize_name(value: str) -> list[str]:
    return [token for token in _TOKEN_SPLIT.split(value) if token]


def names_similar(first: str, second: str) -> bool:
    """
    Containment with a length ratio above 0.8, or token overlap of at least
    70% of the smaller token set.
    """

    if contains_either(first, second) and length_ratio(first, second) > 0.8:
        return True

    tokens_a = tokenize_name(first)
    tokens_b = tokenize_name(second)
    common = [token for token in tokens_a if token in tokens_b]
    return bool(common) and len(common) >= min(len(tokens_a), len(tokens_b)) * 0.7


def is_similar_value(first: str | None, second: str | None, field_type: str) -> bool:
    if not first or not second:
        return False

    value_a = first.lower().strip()
    value_b = second.lower().strip()
    if value_a == value_b:
        return True
    # GitHub values compare by org segment; hostnames are always github.com.
    if field_type == "github":
        return github_owner(value_a) == github_owner(value_b)
    if field_type in URL_FIELD_TYPES and urls_similar(value_a, value_b):
        return True
    if field_type in NAME_FIELD_TYPES and names_similar(value_a, value_b):
        return True
    return False
