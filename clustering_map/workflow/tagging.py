"""Tag dictionary helpers for the tagging step."""

from __future__ import annotations

from typing import Iterable, List, Optional, Sequence

from ..models import TagCandidate, TagRule


def seed_tag_rules(
    candidates: Iterable[TagCandidate],
    existing: Sequence[TagRule] = (),
) -> List[TagRule]:
    """Build the working dictionary: existing rules first, then one rule per
    candidate whose label no existing rule already uses as keyword.

    Candidate order is kept; duplicate labels collapse to their first occurrence.
    """
    rules = list(existing)
    seen = {rule.keyword.casefold() for rule in rules}
    for candidate in candidates:
        key = candidate.label.strip()
        if not key or key.casefold() in seen:
            continue
        seen.add(key.casefold())
        rules.append(TagRule(keyword=key, tag=key))
    return rules


def apply_tag_rules(text: str, rules: Sequence[TagRule]) -> Optional[str]:
    """Return the tag of the first rule matching ``text``, or None.

    First match wins: earlier rules take precedence over later ones.
    """
    for rule in rules:
        if rule.matches(text):
            return rule.tag
    return None


def preview_tags(texts: Iterable[str], rules: Sequence[TagRule]) -> List[Optional[str]]:
    """Tag each response locally, e.g. to preview the dictionary on sample rows."""
    return [apply_tag_rules(text, rules) for text in texts]
