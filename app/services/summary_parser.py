"""
Best-effort parser for the free-form text the summary model returns.

The prompt asks for a `TL;DR:` line and bullet points, but models do not
always comply, so this is a tolerant line scanner rather than a grammar.
Each non-blank line is classified by the first rule that matches:

1. TL;DR marker ("tl;dr", "кратко", "суть"; case-insensitive) sets `tldr`.
2. Heading ("#..." or "1. ...") commits the open section and opens a new one.
3. Bullet ("- ", "* ", "• ") adds a point to the open section.
4. Anything else is added as a point as well.

Points arriving before any heading go to an implicit section with the
default title. The parser is total: non-blank input always yields at
least one section with at least one point.
"""
import re
from typing import List, Optional

from app.core.constants import SummarizationConfig
from app.models.summary import SummaryResult, SummarySection

# Marker must be a whole word: "Кратковременный ..." is not a TL;DR line
TLDR_LINE = re.compile(r"^(tl;dr|кратко|суть)(?=$|[\s:.,\-])", re.IGNORECASE)
TLDR_MARKER = re.compile(r"^(tl;dr|кратко|суть)[:\s]*", re.IGNORECASE)
HEADING_LINE = re.compile(r"^(#|\d+\.)")
HEADING_MARKER = re.compile(r"^#+\s*|^\d+\.\s*")
BULLET_LINE = re.compile(r"^[-*•]\s")
BULLET_MARKER = re.compile(r"^[-*•]\s*")


def parse_generated_text(text: str) -> SummaryResult:
    """Parse model output into a TL;DR and titled sections."""
    lines = [line for line in text.splitlines() if line.strip()]
    result = SummaryResult()
    current: Optional[SummarySection] = None

    def commit(section: Optional[SummarySection]) -> None:
        if section is not None and section.points:
            result.sections.append(section)

    def add_point(point: str) -> None:
        nonlocal current
        if current is None:
            current = SummarySection(title=SummarizationConfig.DEFAULT_SECTION_TITLE)
        current.points.append(point)

    for line in lines:
        stripped = line.strip()

        if TLDR_LINE.match(stripped):
            result.tldr = TLDR_MARKER.sub("", stripped).strip()
            continue

        if HEADING_LINE.match(stripped):
            commit(current)
            title = HEADING_MARKER.sub("", stripped).strip()
            current = SummarySection(title=title or SummarizationConfig.DEFAULT_SECTION_TITLE)
            continue

        if BULLET_LINE.match(stripped):
            add_point(BULLET_MARKER.sub("", stripped).strip())
            continue

        add_point(stripped)

    commit(current)

    if not result.tldr and result.sections:
        result.tldr = result.sections[0].points[0]

    if not result.sections and lines:
        result.sections.append(
            SummarySection(title=SummarizationConfig.DEFAULT_SECTION_TITLE, points=list(lines))
        )

    return result
