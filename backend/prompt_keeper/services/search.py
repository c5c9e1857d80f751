"""Prompt list filtering and fuzzy text search."""
from difflib import SequenceMatcher
from typing import Iterable, List, Optional, Sequence

from prompt_keeper.models.prompt import Prompt


def normalize_tag(tag: Optional[str]) -> str:
    return (tag or "").strip().lower()


def normalize_tags(tags: Optional[Iterable[str]]) -> List[str]:
    """Trim and lowercase tags, dropping blanks and repeats (first occurrence wins)."""
    cleaned: List[str] = []
    for tag in tags or []:
        name = normalize_tag(tag)
        if name and name not in cleaned:
            cleaned.append(name)
    return cleaned


def _build_search_block(prompt: Prompt) -> str:
    return " ".join(filter(None, [prompt.title or "", prompt.body or "", " ".join(prompt.tags or [])])).lower()


def _query_tokens(search: str) -> List[str]:
    return [t for t in search.replace(",", " ").split() if t]


def score_search_match(search: str, text_block: str) -> float:
    """Return a fuzzy score between the search term and the text block.

    The score blends token coverage and SequenceMatcher similarity so that
    partial matches (e.g. "cold email" vs "email, cold outreach") rank close
    to exact ones.
    """

    search_lower = (search or "").strip().lower()
    if not search_lower:
        return 0.0

    text_lower = text_block.lower()
    tokens = _query_tokens(search_lower)
    token_hits = sum(1 for t in tokens if t in text_lower)
    coverage = token_hits / len(tokens) if tokens else 0
    similarity = SequenceMatcher(None, search_lower, text_lower).ratio()

    substring_bonus = 0.25 if search_lower in text_lower else 0
    return (0.6 * coverage) + (0.4 * similarity) + substring_bonus


def filter_prompts(
    prompts: Sequence[Prompt],
    folder_id: Optional[str] = None,
    tag: Optional[str] = None,
    query: Optional[str] = None,
) -> List[Prompt]:
    """
    Narrow ``prompts`` by folder, tag and free-text query.

    Without a query the input order is kept. With a query, prompts that
    contain none of its tokens are dropped and the rest are ordered by
    descending score; ties keep their input order.
    """
    results = list(prompts)

    if folder_id:
        results = [p for p in results if p.folder_id == folder_id]

    wanted_tag = normalize_tag(tag)
    if wanted_tag:
        results = [p for p in results if wanted_tag in (p.tags or [])]

    search = (query or "").strip().lower()
    if not search:
        return results

    tokens = _query_tokens(search)
    scored = []
    for prompt in results:
        block = _build_search_block(prompt)
        if not any(t in block for t in tokens):
            continue
        scored.append((score_search_match(search, block), prompt))

    scored.sort(key=lambda item: item[0], reverse=True)
    return [prompt for _, prompt in scored]
