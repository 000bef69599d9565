"""
Groups the tag occurrences returned by the tagging service into per-label
location markers.
"""

from typing import Dict, Iterable, List

from config.config import settings
from tagging.tag_model import TagGroup, TagOccurrence


def is_room_tag(occurrence: TagOccurrence, keyword: str = None) -> bool:
    # Both checks are case-sensitive
    keyword = keyword or settings.Tagging.ROOM_KEYWORD
    return keyword in occurrence.categories or keyword in occurrence.tag


def filter_room_tags(occurrences: Iterable[TagOccurrence], keyword: str = None) -> List[TagOccurrence]:
    return [occurrence for occurrence in occurrences if is_room_tag(occurrence, keyword)]


def group_tags(occurrences: Iterable[TagOccurrence], keyword: str = None) -> List[TagGroup]:
    """
    Filter room tags and cluster them by label, ignoring case.

    Args:
        occurrences: Tag occurrences in the order the service returned them
        keyword: Category/substring that makes an occurrence eligible

    Returns:
        Groups in order of first appearance. Each group is labelled with the
        original casing of its first occurrence and keeps its occurrences in
        input order.
    """
    groups: List[TagGroup] = []
    groups_by_label: Dict[str, TagGroup] = {}

    for occurrence in filter_room_tags(occurrences, keyword):
        key = occurrence.tag.lower()
        group = groups_by_label.get(key)
        if group is None:
            group = TagGroup(label=occurrence.tag, occurrences=[occurrence])
            groups_by_label[key] = group
            groups.append(group)
        else:
            group.occurrences.append(occurrence)

    return groups
