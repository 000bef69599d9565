"""
Tag models and the room tag grouping used to build location markers
"""

from .tag_grouper import group_tags, filter_room_tags, is_room_tag

__all__ = ['group_tags', 'filter_room_tags', 'is_room_tag']
