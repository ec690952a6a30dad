"""Static emoji shortname dictionary.

Lookups are case-insensitive and tolerate surrounding colons, so `smile`, `SMILE` and `:smile:` all
resolve to the same glyph.
"""

from types import MappingProxyType

from markdown_adf.constants import EMOJI_PATTERN

_EMOJI_MAP = {
    # Smileys & Emotion
    'smile': '\U0001F604',
    'laughing': '\U0001F606',
    'blush': '\U0001F60A',
    'smiley': '\U0001F603',
    'relaxed': '\U0000263A',
    'smirk': '\U0001F60F',
    'heart_eyes': '\U0001F60D',
    'kissing_heart': '\U0001F618',
    'kissing_closed_eyes': '\U0001F61A',
    'flushed': '\U0001F633',
    'relieved': '\U0001F60C',
    'satisfied': '\U0001F60C',
    'grin': '\U0001F601',
    'wink': '\U0001F609',
    'stuck_out_tongue_winking_eye': '\U0001F61C',
    'stuck_out_tongue_closed_eyes': '\U0001F61D',
    'grinning': '\U0001F600',
    'kissing': '\U0001F617',
    'kissing_smiling_eyes': '\U0001F619',
    'stuck_out_tongue': '\U0001F61B',
    'sleeping': '\U0001F634',
    'worried': '\U0001F61F',
    'frowning': '\U0001F626',
    'anguished': '\U0001F627',
    'open_mouth': '\U0001F62E',
    'grimacing': '\U0001F62C',
    'confused': '\U0001F615',
    'hushed': '\U0001F62F',
    'expressionless': '\U0001F611',
    'unamused': '\U0001F612',
    'sweat_smile': '\U0001F605',
    'sweat': '\U0001F613',
    'disappointed_relieved': '\U0001F625',
    'weary': '\U0001F629',
    'pensive': '\U0001F614',
    'disappointed': '\U0001F61E',
    'confounded': '\U0001F616',
    'fearful': '\U0001F628',
    'cold_sweat': '\U0001F630',
    'persevere': '\U0001F623',
    'cry': '\U0001F622',
    'sob': '\U0001F62D',
    'joy': '\U0001F602',
    'astonished': '\U0001F632',
    'scream': '\U0001F631',
    'tired_face': '\U0001F62B',
    'angry': '\U0001F620',
    'rage': '\U0001F621',
    'triumph': '\U0001F624',
    'sleepy': '\U0001F62A',
    'yum': '\U0001F60B',
    'mask': '\U0001F637',
    'sunglasses': '\U0001F60E',
    'dizzy_face': '\U0001F635',
    'imp': '\U0001F47F',
    'smiling_imp': '\U0001F608',
    'neutral_face': '\U0001F610',
    'no_mouth': '\U0001F636',
    'innocent': '\U0001F607',
    'alien': '\U0001F47D',
    'yellow_heart': '\U0001F49B',
    'blue_heart': '\U0001F499',
    'purple_heart': '\U0001F49C',
    'heart': '\U00002764',
    'green_heart': '\U0001F49A',
    'broken_heart': '\U0001F494',
    'heartbeat': '\U0001F493',
    'heartpulse': '\U0001F497',
    'two_hearts': '\U0001F495',
    'revolving_hearts': '\U0001F49E',
    'cupid': '\U0001F498',
    'sparkling_heart': '\U0001F496',
    'sparkles': '\U00002728',
    'star': '\U00002B50',
    'star2': '\U0001F31F',
    'dizzy': '\U0001F4AB',
    'boom': '\U0001F4A5',
    'collision': '\U0001F4A5',
    'anger': '\U0001F4A2',
    'exclamation': '\U00002757',
    'question': '\U00002753',
    'grey_exclamation': '\U00002755',
    'grey_question': '\U00002754',
    'zzz': '\U0001F4A4',
    'dash': '\U0001F4A8',
    'sweat_drops': '\U0001F4A6',
    'notes': '\U0001F3B6',
    'musical_note': '\U0001F3B5',
    'fire': '\U0001F525',
    'poop': '\U0001F4A9',

    # Gestures & Body
    'thumbsup': '\U0001F44D',
    '+1': '\U0001F44D',
    'thumbsdown': '\U0001F44E',
    '-1': '\U0001F44E',
    'ok_hand': '\U0001F44C',
    'punch': '\U0001F44A',
    'fist': '\U0000270A',
    'v': '\U0000270C',
    'wave': '\U0001F44B',
    'hand': '\U0000270B',
    'raised_hand': '\U0000270B',
    'open_hands': '\U0001F450',
    'point_up': '\U0000261D',
    'point_down': '\U0001F447',
    'point_left': '\U0001F448',
    'point_right': '\U0001F449',
    'raised_hands': '\U0001F64C',
    'pray': '\U0001F64F',
    'point_up_2': '\U0001F446',
    'clap': '\U0001F44F',
    'muscle': '\U0001F4AA',
    'metal': '\U0001F918',
    'eyes': '\U0001F440',
    'ear': '\U0001F442',
    'nose': '\U0001F443',
    'lips': '\U0001F444',
    'tongue': '\U0001F445',

    # Common Objects
    'book': '\U0001F4D6',
    'bookmark': '\U0001F516',
    'books': '\U0001F4DA',
    'pencil': '\U0000270F',
    'pencil2': '\U0000270F',
    'pen': '\U0001F58A',
    'memo': '\U0001F4DD',
    'briefcase': '\U0001F4BC',
    'file_folder': '\U0001F4C1',
    'calendar': '\U0001F4C5',
    'clipboard': '\U0001F4CB',
    'pushpin': '\U0001F4CC',
    'paperclip': '\U0001F4CE',
    'link': '\U0001F517',
    'email': '\U0001F4E7',
    'envelope': '\U00002709',
    'phone': '\U0000260E',
    'telephone': '\U0000260E',
    'computer': '\U0001F4BB',
    'desktop_computer': '\U0001F5A5',
    'keyboard': '\U00002328',
    'bulb': '\U0001F4A1',
    'battery': '\U0001F50B',
    'mag': '\U0001F50D',
    'mag_right': '\U0001F50E',
    'lock': '\U0001F512',
    'unlock': '\U0001F513',
    'key': '\U0001F511',
    'hammer': '\U0001F528',
    'wrench': '\U0001F527',
    'gear': '\U00002699',
    'package': '\U0001F4E6',
    'gift': '\U0001F381',
    'bell': '\U0001F514',
    'trophy': '\U0001F3C6',
    'medal': '\U0001F3C5',

    # Arrows & Symbols
    'arrow_up': '\U00002B06',
    'arrow_down': '\U00002B07',
    'arrow_left': '\U00002B05',
    'arrow_right': '\U000027A1',
    'arrow_upper_left': '\U00002196',
    'arrow_upper_right': '\U00002197',
    'arrow_lower_left': '\U00002199',
    'arrow_lower_right': '\U00002198',
    'left_right_arrow': '\U00002194',
    'arrow_up_down': '\U00002195',
    'arrows_clockwise': '\U0001F503',
    'arrows_counterclockwise': '\U0001F504',
    'rewind': '\U000023EA',
    'fast_forward': '\U000023E9',
    'arrow_double_up': '\U000023EB',
    'arrow_double_down': '\U000023EC',
    'arrow_backward': '\U000025C0',
    'arrow_forward': '\U000025B6',
    'white_check_mark': '\U00002705',
    'check': '\U00002714',
    'heavy_check_mark': '\U00002714',
    'x': '\U0000274C',
    'negative_squared_cross_mark': '\U0000274E',
    'heavy_plus_sign': '\U00002795',
    'heavy_minus_sign': '\U00002796',
    'heavy_multiplication_x': '\U00002716',
    'heavy_division_sign': '\U00002797',
    'warning': '\U000026A0',
    'no_entry': '\U000026D4',
    'no_entry_sign': '\U0001F6AB',
    'information_source': '\U00002139',

    # Weather & Nature
    'sunny': '\U00002600',
    'cloud': '\U00002601',
    'umbrella': '\U00002614',
    'snowflake': '\U00002744',
    'zap': '\U000026A1',
    'cyclone': '\U0001F300',
    'rainbow': '\U0001F308',
    'ocean': '\U0001F30A',
    'earth_africa': '\U0001F30D',
    'earth_americas': '\U0001F30E',
    'earth_asia': '\U0001F30F',
    'sun_with_face': '\U0001F31E',
    'moon': '\U0001F319',
    'full_moon': '\U0001F315',
    'new_moon': '\U0001F311',

    # Time
    'hourglass': '\U0000231B',
    'hourglass_flowing_sand': '\U000023F3',
    'watch': '\U0000231A',
    'alarm_clock': '\U000023F0',
    'stopwatch': '\U000023F1',
    'timer_clock': '\U000023F2',

    # Status indicators (commonly used in Jira/Confluence)
    'rocket': '\U0001F680',
    'checkered_flag': '\U0001F3C1',
    'construction': '\U0001F6A7',
    'rotating_light': '\U0001F6A8',
    'sos': '\U0001F198',
    'red_circle': '\U0001F534',
    'orange_circle': '\U0001F7E0',
    'yellow_circle': '\U0001F7E1',
    'green_circle': '\U0001F7E2',
    'blue_circle': '\U0001F535',
    'purple_circle': '\U0001F7E3',
    'white_circle': '\U000026AA',
    'black_circle': '\U000026AB',
}

EMOJI_MAP = MappingProxyType(_EMOJI_MAP)
"""Read-only mapping of shortnames (without colons) to Unicode glyphs."""

_GLYPH_TO_SHORTNAME: dict[str, str] = {}
for _shortname, _glyph in _EMOJI_MAP.items():
    _GLYPH_TO_SHORTNAME.setdefault(_glyph, _shortname)


def _normalize_shortname(shortname: str) -> str:
    normalized = shortname.lower()
    if normalized.startswith(':'):
        normalized = normalized[1:]
    if normalized.endswith(':'):
        normalized = normalized[:-1]
    return normalized


def get_emoji_unicode(shortname: str) -> str | None:
    """Get the Unicode glyph of an emoji shortname.

    Args:
        shortname: the shortname, with or without surrounding colons

    Returns:
        The glyph, or None if the shortname is unknown.
    """
    return EMOJI_MAP.get(_normalize_shortname(shortname))


def get_emoji_shortname(glyph: str) -> str | None:
    """Get the first shortname registered for a Unicode glyph."""
    return _GLYPH_TO_SHORTNAME.get(glyph)


def is_valid_emoji(shortname: str) -> bool:
    return _normalize_shortname(shortname) in EMOJI_MAP


def get_all_emoji_shortnames() -> list[str]:
    return list(EMOJI_MAP.keys())


def replace_emoji_shortnames(text: str) -> str:
    """Replace every known `:shortname:` in a text with its glyph; unknown ones are left as-is."""

    def replace_match(match):
        return get_emoji_unicode(match.group(1)) or match.group(0)

    return EMOJI_PATTERN.sub(replace_match, text)


def replace_unicode_emojis(text: str) -> str:
    """Replace every known glyph in a text with its `:shortname:`."""
    for glyph, shortname in _GLYPH_TO_SHORTNAME.items():
        text = text.replace(glyph, f':{shortname}:')
    return text
