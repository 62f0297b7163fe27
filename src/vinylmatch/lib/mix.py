"""Mix taxonomy normalization for dance and electronic music titles.

Vinyl releases routinely carry several versions of one track ("Radio
Edit", "Dub Mix", "Extended Version"). This module splits a title into
its base name and a canonical mix type, and scores how interchangeable
two mix types are. A radio edit is never an acceptable stand-in for a
dub, no matter how similar the base titles are.
"""

import logging
import re
from dataclasses import dataclass

from vinylmatch.models.enums import MixType

logger = logging.getLogger(__name__)

# ============================================================================
# PRIVATE CONSTANTS - Taxonomy and compatibility tables (not exported)
# ============================================================================

# Canonical mix type -> surface forms found inside title brackets.
# Dict order is the tie-breaker when two synonyms of equal length match.
_MIX_SYNONYMS: dict[MixType, tuple[str, ...]] = {
    MixType.RADIO: (
        "radio",
        "radio edit",
        "radio version",
        "radio mix",
        "edit",
        "single edit",
        "short edit",
    ),
    MixType.EXTENDED: (
        "extended",
        "extended mix",
        '12"',
        "12 inch",
        "club mix",
        "club version",
        "full length",
        "long version",
    ),
    MixType.DUB: (
        "dub",
        "dubbed",
        "dub mix",
        "dub version",
        "instrumental",
        "inst",
        "instro",
    ),
    MixType.ORIGINAL: (
        "original",
        "original mix",
        "original version",
        '7"',
        "7 inch",
        "album version",
    ),
    MixType.REMIX: ("remix", "remixed", "rmx", "rework", "reworked", "refix"),
    MixType.ACCAPELLA: (
        "accapella",
        "acapella",
        "vocal",
        "vocals only",
        "a cappella",
    ),
    MixType.BEATS: ("beats", "beats mix", "beatmix", "drum mix", "drums"),
    MixType.CLEAN: ("clean", "clean version", "clean mix", "clean edit"),
    MixType.DIRTY: ("dirty", "explicit", "uncensored", "uncut"),
    MixType.LIVE: ("live", "live version", "live mix", "concert version"),
}

# Whole-word synonym patterns, e.g. "edit" must not match "Deluxe Edition"
_SYNONYM_PATTERNS: tuple[tuple[MixType, str, re.Pattern[str]], ...] = tuple(
    (mix_type, synonym, re.compile(rf"(?<!\w){re.escape(synonym)}(?!\w)"))
    for mix_type, synonyms in _MIX_SYNONYMS.items()
    for synonym in synonyms
)

# Content of (...) or [...] groups
_BRACKET_GROUP_PATTERN = re.compile(r"[(\[]([^)\]]+)[)\]]")

# Mix type pairs that must never substitute for each other (either order)
_INCOMPATIBLE_PAIRS: frozenset[frozenset[str]] = frozenset(
    frozenset(mix_type.value for mix_type in pair)
    for pair in (
        (MixType.RADIO, MixType.DUB),
        (MixType.RADIO, MixType.INSTRUMENTAL),
        (MixType.RADIO, MixType.REMIX),
        (MixType.RADIO, MixType.EXTENDED),
        (MixType.DUB, MixType.EXTENDED),
        (MixType.DUB, MixType.REMIX),
        (MixType.INSTRUMENTAL, MixType.EXTENDED),
        (MixType.INSTRUMENTAL, MixType.REMIX),
        (MixType.REMIX, MixType.EXTENDED),
        (MixType.ACCAPELLA, MixType.INSTRUMENTAL),
        (MixType.BEATS, MixType.RADIO),
        (MixType.CLEAN, MixType.DIRTY),
        (MixType.LIVE, MixType.RADIO),
        (MixType.LIVE, MixType.DUB),
    )
)

_CANONICAL_MIX_TYPES = frozenset(mix_type.value for mix_type in MixType)

# Compatibility scores (0-100)
_SAME_MIX = 100
_BOTH_ORIGINAL = 95
_DUB_INSTRUMENTAL = 90
_ORIGINAL_SUBSTITUTE = 75
_UNLISTED_PAIR = 25
_INCOMPATIBLE = 20

# Derivation confidence of the extracted mix type
_EMPTY_TITLE_CONFIDENCE = 50
_UNRECOGNIZED_TAG_CONFIDENCE = 70
_NO_ANNOTATION_CONFIDENCE = 90
_KNOWN_TAG_CONFIDENCE = 95


# ============================================================================
# RESULT DATACLASSES
# ============================================================================


@dataclass(frozen=True)
class MixInfo:
    """Mix annotation extracted from a title.

    Attributes:
        base_name: Title with the mix annotation removed.
        mix_type: Canonical mix type, or the lowercased freeform tag when the
            annotation is not in the taxonomy.
        confidence: How sure the extraction is (0-100).
    """

    base_name: str
    mix_type: str | None
    confidence: int

    @property
    def is_recognized(self) -> bool:
        """Whether mix_type is part of the canonical taxonomy."""
        return self.mix_type in _CANONICAL_MIX_TYPES


# ============================================================================
# PUBLIC API
# ============================================================================


def normalize_mix_tag(tag: str) -> MixType | None:
    """Map the text of one bracket group to a canonical mix type.

    The longest matching synonym wins, so "Extended Edit" is an extended
    mix rather than a radio edit.

    Args:
        tag: Bracket content, e.g. "Dub Mix".

    Returns:
        Canonical mix type, or None if no synonym occurs in the tag.
    """
    content = tag.lower().strip()
    if not content:
        return None

    best: tuple[MixType, str] | None = None
    for mix_type, synonym, pattern in _SYNONYM_PATTERNS:
        if pattern.search(content) and (best is None or len(synonym) > len(best[1])):
            best = (mix_type, synonym)
    return best[0] if best else None


def _strip_group(title: str, match: re.Match[str]) -> str:
    """Remove one bracket group from a title and tidy the whitespace."""
    stripped = title[: match.start()] + " " + title[match.end() :]
    return " ".join(stripped.split())


def extract_mix_info(title: object) -> MixInfo:
    """Split a title into base name and mix type.

    Bracket groups are scanned in order; the first one naming a known mix
    type decides. When none do, the last group is treated as a freeform
    mix tag. Titles without brackets are the original mix.

    Args:
        title: Track or candidate title. Non-strings count as empty.

    Returns:
        MixInfo for the title.

    Examples:
        >>> extract_mix_info("Lovelee Dae (Dub Mix)")
        MixInfo(base_name='Lovelee Dae', mix_type='dub', confidence=95)
        >>> extract_mix_info("Spastik")
        MixInfo(base_name='Spastik', mix_type='original', confidence=90)
    """
    if not isinstance(title, str) or not title.strip():
        return MixInfo(
            base_name="",
            mix_type=MixType.ORIGINAL.value,
            confidence=_EMPTY_TITLE_CONFIDENCE,
        )

    groups = list(_BRACKET_GROUP_PATTERN.finditer(title))
    if not groups:
        return MixInfo(
            base_name=title.strip(),
            mix_type=MixType.ORIGINAL.value,
            confidence=_NO_ANNOTATION_CONFIDENCE,
        )

    for group in groups:
        if mix_type := normalize_mix_tag(group.group(1)):
            return MixInfo(
                base_name=_strip_group(title, group),
                mix_type=mix_type.value,
                confidence=_KNOWN_TAG_CONFIDENCE,
            )

    last = groups[-1]
    tag = last.group(1).lower().strip()
    logger.debug("Unrecognized mix tag %r in %r", tag, title)
    return MixInfo(
        base_name=_strip_group(title, last),
        mix_type=tag,
        confidence=_UNRECOGNIZED_TAG_CONFIDENCE,
    )


def is_incompatible_mix(track_mix: str | None, candidate_mix: str | None) -> bool:
    """Whether two mix types are listed as never interchangeable."""
    if track_mix is None or candidate_mix is None:
        return False
    return frozenset((track_mix, candidate_mix)) in _INCOMPATIBLE_PAIRS


def calculate_mix_compatibility(
    track_mix: str | None, candidate_mix: str | None
) -> int:
    """Score how well a candidate's mix type stands in for the track's.

    Args:
        track_mix: Mix type the release lists.
        candidate_mix: Mix type of the candidate source.

    Returns:
        Compatibility from 0 to 100. Unlisted pairs score low on purpose.
    """
    original = MixType.ORIGINAL.value

    if track_mix == candidate_mix:
        return _SAME_MIX
    if track_mix in (original, None) and candidate_mix in (original, None):
        return _BOTH_ORIGINAL
    if is_incompatible_mix(track_mix, candidate_mix):
        return _INCOMPATIBLE
    # An original upload can stand in for a specific version, not vice versa
    if candidate_mix == original:
        return _ORIGINAL_SUBSTITUTE
    if {track_mix, candidate_mix} == {MixType.DUB.value, MixType.INSTRUMENTAL.value}:
        return _DUB_INSTRUMENTAL
    return _UNLISTED_PAIR
