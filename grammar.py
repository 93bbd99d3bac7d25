"""
Screenplay line grammar.

Screenplay formatting has no formal grammar, so each structural element is
recognised by a named line-shape rule. The rules here are context free; the
classifier combines them with lookahead.
"""
import re

from models import SceneHeading

# Any letter in any script; case is checked separately
LETTER = r'[^\W\d_]'

# Longest prefix first: "INT/EXT" must not be read as "INT" + "/EXT"
INT_EXT_PREFIX = r'(?:INT\.?\s*/\s*EXT|EXT\.?\s*/\s*INT|INT/EXT|I/E|INT|EXT)\.?'

TIME_OF_DAY = (
    'SAME TIME', 'MOMENTS LATER', 'DAY', 'NIGHT', 'MORNING', 'EVENING', 'DAWN',
    'DUSK', 'CONTINUOUS', 'LATER', 'AFTERNOON', 'SUNSET', 'SUNRISE',
)
_TOD = '|'.join(TIME_OF_DAY)

# (a) "INT. KITCHEN - DAY"
HEADING_DASH_PATTERN = re.compile(
    rf'^(?P<prefix>{INT_EXT_PREFIX})\s+(?P<location>.+?)\s*[-–—]\s*(?P<time>{_TOD})\b',
    re.IGNORECASE
)
# (b) "INT. KITCHEN. DAY"
HEADING_PERIOD_PATTERN = re.compile(
    rf'^(?P<prefix>{INT_EXT_PREFIX})\s+(?P<location>.+?)\.\s*(?P<time>{_TOD})\b',
    re.IGNORECASE
)
# (c) "INT. CAR": prefix and a location starting with three letters or spaces
HEADING_BARE_PATTERN = re.compile(
    rf"^(?P<prefix>{INT_EXT_PREFIX})\s+(?P<location>{LETTER}(?:{LETTER}|[\s']){{2,}}.*)$",
    re.IGNORECASE
)

TRANSITIONS = (
    'FADE IN', 'FADE OUT', 'CUT TO', 'DISSOLVE TO', 'SMASH CUT TO',
    'MATCH CUT TO', 'JUMP CUT TO', 'WIPE TO', 'IRIS IN', 'IRIS OUT',
    'THE END', 'CONTINUED', 'TO BE CONTINUED',
)
TRANSITION_PATTERN = re.compile(
    r'\b(?:' + '|'.join(re.escape(t) for t in TRANSITIONS) + r')\b',
    re.IGNORECASE
)

PAGE_NUMBER_PATTERN = re.compile(r'^\d{1,3}\.?$')
PAGE_FOOTER_PATTERNS = (
    re.compile(r'^-*\s*\d+\s+of\s+\d+\s*-*$', re.IGNORECASE),
    re.compile(r'^Page\s+\d+\.?$', re.IGNORECASE),
)

PARENTHETICAL_PATTERN = re.compile(r'^\([^()]*\)$')
TRAILING_EXTENSIONS_PATTERN = re.compile(r'(?:\s*\([^()]*\))+\s*$')
ANY_PARENTHETICAL_PATTERN = re.compile(r'\([^()]*\)')

NAME_SHAPE_PATTERN = re.compile(rf"^{LETTER}(?:{LETTER}|[\s'’.\-])*$")
# "J.J." or "J.J. ABRAMS"; any other period disqualifies a cue
INITIALS_PATTERN = re.compile(
    rf"^(?:{LETTER}\.)+{LETTER}?\.?(?:\s+{LETTER}(?:{LETTER}|[\s'’\-])*)?$"
)
WHITESPACE_PATTERN = re.compile(r'\s+')
CAPS_TEXT_PATTERN = re.compile(rf"^(?:{LETTER}|[\s'.\-])+$")

MIN_CUE_LENGTH = 2
MAX_CUE_LENGTH = 50
ALL_CAPS_ACTION_LENGTH = 60
SENTENCE_ACTION_LENGTH = 40
ACTION_VERB_CUE_LENGTH = 20

# All-caps words that show up alone in action but are never speakers
CUE_DENYLIST = frozenset({
    'THE', 'AND', 'OR', 'BUT', 'SO', 'IF', 'WHEN', 'WHERE', 'WHY', 'HOW',
    'CUT', 'FADE', 'DISSOLVE', 'SMASH', 'MATCH', 'JUMP', 'WIPE', 'IRIS',
    'CONTINUED', 'MORE', 'CONTINUOUS', 'SAME', 'TIME', 'MOMENTS', 'LATER',
    'STOP', 'START', 'BEGIN', 'END', 'FINISH', 'COMPLETE', 'DONE',
})
ACTION_VERBS = ('WALKS', 'RUNS', 'SITS', 'STANDS', 'LOOKS', 'TURNS', 'OPENS', 'CLOSES')

DIALOGUE_SHAPE_PATTERNS = (
    re.compile(r'^(?:Yes|No|Hello|Hi|Hey|What|How|Why|Where|When|Who)\b', re.IGNORECASE),
    re.compile(r'[.!?]$'),
    re.compile(r'\b(?:I|you|he|she|we|they|it)\s', re.IGNORECASE),
)

CURLY_APOSTROPHES = str.maketrans({'’': "'", '‘': "'"})


def is_blank(line: str) -> bool:
    return not line.strip()


def is_page_number(line: str) -> bool:
    """A line holding only a 1-3 digit number, e.g. "12" or "12."."""
    return bool(PAGE_NUMBER_PATTERN.match(line.strip()))


def is_page_footer(line: str) -> bool:
    """"- 3 of 10 -" or "Page 3"."""
    stripped = line.strip()
    return any(p.match(stripped) for p in PAGE_FOOTER_PATTERNS)


def is_scene_heading(line: str) -> bool:
    stripped = line.strip()
    return bool(
        HEADING_DASH_PATTERN.match(stripped)
        or HEADING_PERIOD_PATTERN.match(stripped)
        or HEADING_BARE_PATTERN.match(stripped)
    )


def _int_ext(prefix: str) -> str:
    return WHITESPACE_PATTERN.sub('', prefix).replace('.', '').upper()


def parse_scene_heading(heading: str) -> SceneHeading:
    """
    Split a heading into INT/EXT, location and time of day.

    Never fails: a line that matches none of the heading rules comes back
    as INT / Unknown / DAY with ``matched=False``.
    """
    stripped = heading.strip()

    for pattern in (HEADING_DASH_PATTERN, HEADING_PERIOD_PATTERN):
        match = pattern.match(stripped)
        if match:
            return SceneHeading(
                int_ext=_int_ext(match.group('prefix')),
                location=match.group('location').strip() or 'Unknown',
                time_of_day=WHITESPACE_PATTERN.sub(' ', match.group('time')).upper(),
            )

    match = HEADING_BARE_PATTERN.match(stripped)
    if match:
        location = match.group('location').strip().rstrip('.').strip()
        return SceneHeading(
            int_ext=_int_ext(match.group('prefix')),
            location=location or 'Unknown',
            time_of_day='DAY',
        )

    return SceneHeading(int_ext='INT', location='Unknown', time_of_day='DAY', matched=False)


def is_transition(line: str) -> bool:
    return bool(TRANSITION_PATTERN.search(line))


def is_parenthetical(line: str) -> bool:
    """Wrapped in exactly one pair of parentheses, e.g. "(beat)"."""
    return bool(PARENTHETICAL_PATTERN.match(line.strip()))


def strip_extensions(line: str) -> str:
    """Drop trailing cue extensions such as "(O.S.)" or "(CONT'D)"."""
    return TRAILING_EXTENSIONS_PATTERN.sub('', line.strip()).strip()


def is_name_shaped(line: str) -> bool:
    """
    Context-free half of the character-cue test.

    Checks length, upper-case name shape, initials-only periods, the
    denylist and the action-verb rule. It does not look at the following
    lines; see ``line_classifier`` for that.
    """
    stripped = line.strip()
    if not MIN_CUE_LENGTH <= len(stripped) <= MAX_CUE_LENGTH:
        return False

    name = strip_extensions(stripped)
    if not name or not any(c.isupper() for c in name) or any(c.islower() for c in name):
        return False
    if not NAME_SHAPE_PATTERN.match(name):
        return False
    if '.' in name and not INITIALS_PATTERN.match(name):
        return False

    if is_scene_heading(stripped) or is_transition(stripped):
        return False

    collapsed = WHITESPACE_PATTERN.sub(' ', name)
    if collapsed in CUE_DENYLIST:
        return False
    if len(collapsed) > ACTION_VERB_CUE_LENGTH and any(v in collapsed for v in ACTION_VERBS):
        return False

    return True


def is_likely_action(line: str) -> bool:
    """Long capitalised text is description, not a name or a dialogue line."""
    stripped = line.strip()
    if is_name_shaped(stripped):
        return False

    starts_with_cap = stripped[:1].isupper()
    has_lowercase = any(c.islower() for c in stripped)
    is_all_caps = bool(CAPS_TEXT_PATTERN.match(stripped)) and not has_lowercase

    if is_all_caps and len(stripped) > ALL_CAPS_ACTION_LENGTH:
        return True
    if starts_with_cap and has_lowercase and len(stripped) > SENTENCE_ACTION_LENGTH:
        return True
    return False


def looks_like_dialogue(line: str) -> bool:
    """Quotes, a conversational opener, terminal punctuation or a pronoun."""
    stripped = line.strip()
    if not stripped:
        return False
    if '"' in stripped or "'" in stripped or '’' in stripped:
        return True
    return any(p.search(stripped) for p in DIALOGUE_SHAPE_PATTERNS)


def canonicalize_name(raw: str) -> str:
    """
    Stable identity for a character cue.

    "JJ’ DAD (O.S.)" and "jj' dad" both become "JJ' DAD".
    """
    name = raw.replace('â€™', "'").translate(CURLY_APOSTROPHES)
    name = ANY_PARENTHETICAL_PATTERN.sub('', name)
    return WHITESPACE_PATTERN.sub(' ', name).strip().upper()

