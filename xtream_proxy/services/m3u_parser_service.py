"""
M3U playlist parsing

Parses the extended M3U documents returned by `/get.php`:

    #EXTM3U url-tvg="http://..."
    #EXTINF:-1 tvg-id="bbc1.uk" group-title="UK",BBC One
    #EXTVLCOPT:http-user-agent=Foo
    http://host/live/user/pass/1.ts
"""
import logging
import re

from xtream_proxy.models import Playlist, PlaylistEntry

logger = logging.getLogger(__name__)

M3U_HEADER = "#EXTM3U"
EXTINF_PREFIX = "#EXTINF:"

ATTR_RE = re.compile(r'([\w][\w\-]*)="([^"]*)"')
DURATION_RE = re.compile(r"\s*([+-]?\d+)(?:\.\d+)?(?=\s|,|$)")


def parse_extinf(line: str) -> tuple[int, dict[str, str], str]:
    """
    Split an #EXTINF line into duration, attributes and title

    The title is everything after the first comma that is not inside a quoted
    attribute value. A missing or malformed duration decodes to -1.
    """
    body = line[len(EXTINF_PREFIX):]

    match = DURATION_RE.match(body)
    duration = int(match.group(1)) if match else -1

    title = ""
    in_quotes = False
    for index, char in enumerate(body):
        if char == '"':
            in_quotes = not in_quotes
        elif char == "," and not in_quotes:
            title = body[index + 1:].strip()
            body = body[:index]
            break

    return duration, dict(ATTR_RE.findall(body)), title


def parse_m3u(text: str) -> Playlist:
    """
    Parse an extended M3U playlist

    Args:
        text: Playlist document

    Returns:
        Playlist with header attributes and one entry per #EXTINF/URL pair

    Raises:
        ValueError: If the body is neither empty nor an M3U playlist
    """
    lines = [line.strip() for line in text.splitlines() if line.strip()]
    if not lines:
        return Playlist()

    playlist = Playlist()
    has_header = lines[0].upper().startswith(M3U_HEADER)
    if has_header:
        playlist.header_attributes = dict(ATTR_RE.findall(lines[0]))

    i = 1 if has_header else 0
    while i < len(lines):
        line = lines[i]
        if not line.upper().startswith(EXTINF_PREFIX):
            i += 1
            continue

        duration, attributes, title = parse_extinf(line)

        # The URL is the next non-directive line (#EXTVLCOPT, #EXTGRP may sit in between)
        j = i + 1
        while j < len(lines) and lines[j].startswith("#"):
            if lines[j].upper().startswith(EXTINF_PREFIX):
                break
            j += 1

        if j < len(lines) and not lines[j].startswith("#"):
            playlist.entries.append(PlaylistEntry(
                url=lines[j],
                title=title,
                duration=duration,
                attributes=attributes,
            ))
            j += 1
        else:
            logger.debug(f"Skipping #EXTINF entry without URL: '{title}'")
        i = j

    if not has_header and not playlist.entries:
        raise ValueError("Body is not an M3U playlist")

    logger.info(f"M3U parsing complete: {len(playlist.entries)} entries")
    return playlist
