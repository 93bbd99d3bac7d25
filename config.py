"""
Parser configuration.
"""
from dataclasses import dataclass
from typing import Literal

CueConfirmation = Literal["permissive", "strict"]

DEFAULT_TAB_WIDTH = 4
DEFAULT_PAGE_NUMBER_THRESHOLD = 0.5
DEFAULT_FORM_FEED_TOLERANCE = 1.5
DEFAULT_MAX_SUMMARY_ACTIONS = 3
DEFAULT_MAX_SUMMARY_DIALOGUE = 2
DEFAULT_DIALOGUE_EXCERPT_LENGTH = 50
DEFAULT_DIALOGUE_LOOKAHEAD = 4

# Hand-curated; callers with a different production vocabulary pass their own.
DEFAULT_PROP_KEYWORDS: tuple[str, ...] = (
    'glasses', 'phone', 'bottle', 'gun', 'knife', 'car', 'train', 'computer',
    'scanner', 'qr', 'kiosk', 'robot', 'tray', 'lift', 'elevator', 'apron',
    'luggage', 'locker', 'juice', 'beer', 'metro', 'sofa', 'camera', 'dress',
    'frame', 'machine', 'caviar', 'vending', 'jet', 'airhostess', 'ticket',
    'passport', 'bag', 'wallet', 'keys', 'door', 'window', 'table', 'chair',
)


@dataclass(frozen=True)
class ParserConfig:
    """
    Options recognised by the parsing pipeline.

    Args:
        preserve_whitespace: Keep tabs and surrounding whitespace verbatim
            (editor mode) instead of expanding and trimming (page mode)
        tab_width: Spaces per tab when not preserving whitespace
        page_number_detection_threshold: Fraction of the declared page count
            that must be found as page-number markers
        form_feed_tolerance: Upper bound multiplier for form-feed page counts
        prop_keywords: Lowercase prop vocabulary
        max_summary_actions: Action lines used in a scene summary
        max_summary_dialogue: Dialogue blocks used in a scene summary
        dialogue_excerpt_length: Characters kept per summarised dialogue block
        cue_confirmation: "permissive" accepts a name-shaped line followed by
            any plain line; "strict" also needs dialogue-shaped text ahead
        dialogue_lookahead: Non-blank lines scanned by the strict policy
    """
    preserve_whitespace: bool = False
    tab_width: int = DEFAULT_TAB_WIDTH
    page_number_detection_threshold: float = DEFAULT_PAGE_NUMBER_THRESHOLD
    form_feed_tolerance: float = DEFAULT_FORM_FEED_TOLERANCE
    prop_keywords: tuple[str, ...] = DEFAULT_PROP_KEYWORDS
    max_summary_actions: int = DEFAULT_MAX_SUMMARY_ACTIONS
    max_summary_dialogue: int = DEFAULT_MAX_SUMMARY_DIALOGUE
    dialogue_excerpt_length: int = DEFAULT_DIALOGUE_EXCERPT_LENGTH
    cue_confirmation: CueConfirmation = "permissive"
    dialogue_lookahead: int = DEFAULT_DIALOGUE_LOOKAHEAD

    def __post_init__(self):
        if not 0 < self.page_number_detection_threshold <= 1:
            raise ValueError(
                f"page_number_detection_threshold must be in (0, 1], "
                f"got {self.page_number_detection_threshold}"
            )
        if self.form_feed_tolerance < 1:
            raise ValueError(f"form_feed_tolerance must be >= 1, got {self.form_feed_tolerance}")
        if self.cue_confirmation not in ("permissive", "strict"):
            raise ValueError(f"Unknown cue_confirmation policy: {self.cue_confirmation!r}")
        for name in ("tab_width", "max_summary_actions", "max_summary_dialogue",
                     "dialogue_excerpt_length", "dialogue_lookahead"):
            if getattr(self, name) < 0:
                raise ValueError(f"{name} must not be negative")
        # Lists are accepted for convenience; stored as a normalised tuple
        object.__setattr__(
            self,
            "prop_keywords",
            tuple(k.strip().lower() for k in self.prop_keywords if k and k.strip()),
        )
