from datetime import date, datetime, timedelta, timezone
from typing import Optional
import logging
import re

from lxml import etree # type: ignore

from xtream_proxy.models import XMLTV, XMLTVChannel, XMLTVProgramme

logger = logging.getLogger(__name__)

# Some servers send <date>1999</date> where XMLTV expects YYYYMMDD
_YEAR_ONLY_DATE_RE = re.compile(r"<date>\s*(\d{4})\s*</date>", re.IGNORECASE)
_YEAR_ONLY_DATE_BYTES_RE = re.compile(rb"<date>\s*(\d{4})\s*</date>", re.IGNORECASE)

XMLTV_ERRORS = (etree.XMLSyntaxError, ValueError)


def sanitize_xmltv(text: str) -> str:
    """Rewrite year-only <date> elements to January 1st of that year"""
    return _YEAR_ONLY_DATE_RE.sub(r"<date>\g<1>0101</date>", text)


def sanitize_xmltv_bytes(data: bytes) -> bytes:
    """Same as sanitize_xmltv, applied to the raw document so its declared encoding is kept"""
    return _YEAR_ONLY_DATE_BYTES_RE.sub(rb"<date>\g<1>0101</date>", data)


def parse_xmltv_bytes(data: bytes) -> XMLTV:
    """
    Sanitize and parse an XMLTV document

    Args:
        data: Raw XMLTV document as returned by the server

    Returns:
        XMLTV with channels, programmes and the sanitized source

    Raises:
        etree.XMLSyntaxError: If XML is malformed
        ValueError: If a programme carries a malformed date or time
    """
    sanitized = sanitize_xmltv_bytes(data)
    if sanitized != data:
        logger.debug("Sanitized year-only <date> elements in XMLTV document")

    logger.debug("  Loading XML document...")
    parser = etree.XMLParser(resolve_entities=False, no_network=True, huge_tree=True)
    try:
        root = etree.fromstring(sanitized, parser=parser)
    except etree.XMLSyntaxError as e:
        logger.error(f"  XML parsing error: {e}")
        raise
    logger.debug(f"  XML document loaded (root tag: {root.tag})")

    if root.tag != 'tv':
        raise ValueError(f"Unexpected XMLTV root element: <{root.tag}>")

    channels = _parse_channels(root)
    programmes = _parse_programmes(root)

    logger.info(f"XMLTV parsing complete: {len(channels)} channels, {len(programmes)} programmes")

    return XMLTV(channels=channels, programmes=programmes, source=sanitized)


def _parse_channels(root: etree._Element) -> list[XMLTVChannel]:
    """Extract channels from XMLTV root element"""
    channels = []

    for channel in root.findall('channel'):
        xmltv_id = channel.get('id')
        if not xmltv_id:
            logger.debug("Skipping channel with missing ID attribute")
            continue

        # Get display name (first one or fallback to ID)
        display_name = _get_text(channel, 'display-name', default=xmltv_id)

        icon_url = None
        icon_elem = channel.find('icon')
        if icon_elem is not None:
            icon_url = icon_elem.get('src')

        channels.append(XMLTVChannel(
            xmltv_id=xmltv_id,
            display_name=display_name or xmltv_id,
            icon_url=icon_url
        ))

    return channels


def _parse_programmes(root: etree._Element) -> list[XMLTVProgramme]:
    """Extract programmes from XMLTV root element"""
    programmes = []

    for programme in root.findall('programme'):
        parsed = _parse_single_programme(programme)
        if parsed:
            programmes.append(parsed)

    return programmes


def _parse_single_programme(programme: etree._Element) -> Optional[XMLTVProgramme]:
    """Parse single programme element"""
    channel_id = programme.get('channel')
    start_str = programme.get('start')
    stop_str = programme.get('stop')

    if not channel_id or not start_str:
        logger.debug("Skipping programme with missing channel or start attribute")
        return None

    return XMLTVProgramme(
        xmltv_channel_id=channel_id,
        start_time=parse_xmltv_time(start_str),
        stop_time=parse_xmltv_time(stop_str) if stop_str else None,
        title=_get_text(programme, 'title', default='') or '',
        description=_get_text(programme, 'desc'),
        date=_parse_xmltv_date(_get_text(programme, 'date')),
        categories=[
            elem.text.strip() for elem in programme.findall('category') if elem.text
        ],
    )


def parse_xmltv_time(time_str: str) -> datetime:
    """
    Convert XMLTV time format to UTC

    Args:
        time_str: XMLTV time like '20080715003000 -0600'

    Returns:
        Timezone-aware datetime in UTC

    Raises:
        ValueError: If the time string is malformed
    """
    parts = time_str.strip().split()
    if not parts:
        raise ValueError(f"Invalid XMLTV time: '{time_str}'")
    time_part = parts[0]  # YYYYMMDDHHMMSS
    tz_part = parts[1] if len(parts) > 1 else '+0000'

    dt = datetime.strptime(time_part[:14], '%Y%m%d%H%M%S')

    # Parse timezone offset (+/-HHMM)
    if len(tz_part) != 5 or tz_part[0] not in '+-' or not tz_part[1:].isdigit():
        raise ValueError(f"Invalid XMLTV timezone offset: '{tz_part}'")
    tz_sign = 1 if tz_part[0] == '+' else -1
    tz_hours = int(tz_part[1:3])
    tz_mins = int(tz_part[3:5])
    tz_offset_minutes = tz_sign * (tz_hours * 60 + tz_mins)

    dt_utc = dt - timedelta(minutes=tz_offset_minutes)

    return dt_utc.replace(tzinfo=timezone.utc)


def _parse_xmltv_date(value: Optional[str]) -> Optional[date]:
    """Parse a programme <date> (YYYYMMDD, longer values truncated)"""
    if value is None:
        return None
    return datetime.strptime(value[:8], '%Y%m%d').date()


def _get_text(element: etree._Element, tag: str, default: Optional[str] = None) -> Optional[str]:
    """Safely extract text from XML element"""
    child = element.find(tag)
    if child is None or not child.text:
        return default
    return child.text.strip()
