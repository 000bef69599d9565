from html import escape
from pathlib import Path
from typing import List

from logger import logger
from config.config import settings
from tagging.tag_model import TagGroup, UploadResult
from viewer.viewer_model import ViewerState

TEMPLATE_PATH = Path(__file__).parent / 'templates' / 'index.html'

def load_template(template_path: str) -> str:
    """Read and return the template content from the given file."""
    try:
        with open(template_path, 'r', encoding='utf-8') as file:
            return file.read()
    except Exception as e:
        logger.error(f"Error loading template from {template_path}: {e}")
        raise

def render_marker_button(player_id: str, text: str, start_time_offset: float) -> str:
    seek = f"document.getElementById('{player_id}').currentTime = {start_time_offset}"
    return f'<button type="button" onclick="{escape(seek)}">{escape(text)}</button>'

def render_tag_group(player_id: str, group: TagGroup) -> str:
    markers = group.markers()
    if len(markers) == 1:
        marker = markers[0]
        return f'<li>{render_marker_button(player_id, marker.text, marker.start_time_offset)}</li>'

    items = ''.join(
        f'<li>{render_marker_button(player_id, marker.text, marker.start_time_offset)}</li>'
        for marker in markers
    )
    return f'<li><h2>{escape(group.label)}</h2><hr><ul>{items}</ul></li>'

def render_video(index: int, video: UploadResult, groups: List[TagGroup]) -> str:
    player_id = f"player-{index}"
    source = escape(video.secure_url + settings.Viewer.STREAM_SUFFIX)
    markers = ''.join(render_tag_group(player_id, group) for group in groups)
    return (
        f'<div class="video-component">'
        f'<video id="{player_id}" controls>'
        f'<source src="{source}" type="video/{escape(video.format)}">'
        f'Your browser does not support the video tag.'
        f'</video>'
        f'<div class="markers"><h1>Location Markers</h1><hr><ul>{markers}</ul></div>'
        f'</div>'
    )

def render_status(state: ViewerState) -> str:
    if not state.loading and not state.error:
        return ''
    lines = ['<div class="column"><hr style="width: 60%">']
    if state.loading:
        lines.append('<p>Please be patient while the video uploads...</p>')
    if state.error:
        lines.append('<p class="error">There was a problem</p>')
    lines.append('</div>')
    return ''.join(lines)

def viewer_page_template(state: ViewerState, groups_per_video: List[List[TagGroup]]) -> str:
    """
    Load the viewer page template and fill it with the current session state.
    `groups_per_video` holds the tag groups of each result, in the same order.
    """
    template = load_template(TEMPLATE_PATH)

    prompt = ("" if state.results else "No Video Yet. ") + "Tap on the button below to add a video."
    if state.results:
        videos = ''.join(
            render_video(index, video, groups)
            for index, (video, groups) in enumerate(zip(state.results, groups_per_video))
        )
    else:
        videos = '<div class="column empty"><hr style="width: 60%">No videos yet</div>'

    return template \
        .replace('{{title}}', escape(settings.General.APP_NAME)) \
        .replace('{{prompt}}', escape(prompt)) \
        .replace('{{upload_disabled}}', ' disabled' if state.loading else '') \
        .replace('{{status}}', render_status(state)) \
        .replace('{{videos}}', videos)
