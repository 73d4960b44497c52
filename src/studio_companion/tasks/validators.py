from __future__ import annotations

from typing import Any, Callable

# Every predicate is total: any shape mismatch returns False, never raises.
# Length minimums are strict ("longer than N characters").


def _is_obj(v: Any) -> bool:
    return isinstance(v, dict)


def _str_longer(v: Any, n: int) -> bool:
    return isinstance(v, str) and len(v) > n


def _str_list(v: Any) -> bool:
    return isinstance(v, list) and all(isinstance(x, str) for x in v)


def _list_between(v: Any, lo: int, hi: int) -> bool:
    return isinstance(v, list) and lo <= len(v) <= hi


def _int_value(v: Any) -> int | None:
    # JSON numbers only; bool is an int subclass in Python and is rejected.
    if isinstance(v, bool):
        return None
    if isinstance(v, int):
        return v
    if isinstance(v, float) and v.is_integer():
        return int(v)
    return None


def is_artist_match(value: Any) -> bool:
    if not _is_obj(value):
        return False
    artists = value.get("artists")
    if not _list_between(artists, 4, 5):
        return False
    return all(
        _is_obj(a)
        and _str_longer(a.get("name"), 2)
        and _str_longer(a.get("visual_connection"), 50)
        and _str_longer(a.get("suggestion"), 20)
        for a in artists
    )


def is_series_ideas(value: Any) -> bool:
    if not _is_obj(value):
        return False
    ideas = value.get("ideas")
    if not _list_between(ideas, 5, 5):
        return False
    ideas_ok = all(
        _is_obj(i)
        and _str_longer(i.get("title"), 3)
        and _str_longer(i.get("description"), 30)
        and _str_longer(i.get("practical_note"), 20)
        for i in ideas
    )
    return ideas_ok and _str_longer(value.get("opening"), 50) and _str_longer(value.get("closing"), 20)


def is_critique(value: Any) -> bool:
    if not _is_obj(value):
        return False
    suggestions = value.get("suggestions")
    if not _list_between(suggestions, 3, 5):
        return False
    return (
        all(_str_longer(s, 30) for s in suggestions)
        and _str_longer(value.get("opening"), 50)
        and _str_longer(value.get("closing"), 15)
    )


ABSTRACTION_LEVELS = frozenset({1, 2, 3, 4, 5})


def _is_path(p: Any) -> bool:
    if not _is_obj(p):
        return False
    if _int_value(p.get("level")) not in ABSTRACTION_LEVELS:
        return False
    if not all(isinstance(p.get(k), str) for k in ("label", "what_to_do", "why_interesting")):
        return False
    prompts = p.get("prompts")
    if prompts is None and "prompts" not in p:
        return True
    return _is_obj(prompts) and all(isinstance(v, str) for v in prompts.values())


def is_abstraction_paths(value: Any) -> bool:
    if not _is_obj(value):
        return False
    paths = value.get("paths")
    if not _list_between(paths, 5, 5):
        return False
    if not all(_is_path(p) for p in paths):
        return False
    # Five paths covering five levels means each level exactly once.
    levels = {_int_value(p.get("level")) for p in paths}
    return (
        levels == ABSTRACTION_LEVELS
        and _str_longer(value.get("brief_read"), 20)
        and _str_longer(value.get("closing_line"), 5)
    )


def is_title_generation(value: Any) -> bool:
    if not _is_obj(value):
        return False
    titles = value.get("titles")
    rationales = value.get("top_rationales")
    tags = value.get("tags")
    return (
        isinstance(value.get("tone"), str)
        and _list_between(titles, 12, 12)
        and _str_list(titles)
        and _list_between(rationales, 3, 3)
        and all(
            _is_obj(r) and isinstance(r.get("title"), str) and isinstance(r.get("why_it_fits"), str)
            for r in rationales
        )
        and _list_between(tags, 5, 7)
        and _str_list(tags)
    )


def is_statement(value: Any) -> bool:
    if not _is_obj(value):
        return False
    return (
        _str_longer(value.get("statement"), 20)
        and _str_longer(value.get("bio"), 20)
        and _str_list(value.get("tips"))
    )


Validator = Callable[[Any], bool]
