from dataclasses import dataclass
from typing import Mapping, Tuple

from google.genai import types


@dataclass(frozen=True)
class PromptTemplate:
    """
    Named slots of the draft generation prompt.

    ``render`` fills the slots with the learning context and the target
    news item; ``response_schema`` is the structured-output contract the
    model response is parsed against. Both read the same output bounds.
    """

    persona: str
    style_rules: Tuple[str, ...]
    post_rules: Tuple[str, ...]
    good_example: str = ''
    bad_example: str = ''
    insight_max_words: int = 20
    draft_min_chars: int = 150
    draft_max_chars: int = 280

    def insight_description(self) -> str:
        return (
            f"A concise, single-sentence summary of why this matters to institutional "
            f"players (max {self.insight_max_words} words)."
        )

    def draft_description(self) -> str:
        return (
            f"Professional analytical commentary, 2-3 sentences "
            f"({self.draft_min_chars}-{self.draft_max_chars} characters), taking a clear "
            f"position with data-driven context. No emojis, no hashtags, no hype language."
        )

    def response_schema(self) -> types.Schema:
        return types.Schema(
            type=types.Type.OBJECT,
            properties={
                'insight': types.Schema(type=types.Type.STRING, description=self.insight_description()),
                'draft_tweet': types.Schema(type=types.Type.STRING, description=self.draft_description()),
            },
            required=['insight', 'draft_tweet'],
        )

    def render(self, learning_context: str, item: Mapping) -> str:
        style = '\n'.join(f"- {rule}" for rule in self.style_rules)
        post_rules = '\n'.join(f"   - {rule}" for rule in self.post_rules)

        sections = [
            f"SYSTEM INSTRUCTION: {self.persona}",
            f"YOUR WRITING STYLE:\n{style}",
            f"LEARNING CONTEXT (EMULATE THESE PAST POSTS IF AVAILABLE):\n---\n{learning_context}\n---",
            (
                "CURRENT NEWS TO ANALYZE:\n"
                f"Title: {item.get('title')}\n"
                f"Source URL: {item.get('url') or 'n/a'}\n"
                f"CryptoPanic Sentiment: {item.get('sentiment') or 'neutral'}"
            ),
            (
                "TASK:\n"
                f"1. Insight: One sentence summarizing why this matters to institutional players "
                f"(max {self.insight_max_words} words)\n"
                f"2. Draft_Tweet: 2-3 sentence professional commentary "
                f"({self.draft_min_chars}-{self.draft_max_chars} characters) that:\n{post_rules}"
            ),
        ]

        if self.good_example:
            sections.append(f'Example good style: "{self.good_example}"')
        if self.bad_example:
            sections.append(f'Example bad style: "{self.bad_example}"')

        sections.append("Output ONLY the JSON with insight and draft_tweet fields.")
        return '\n\n'.join(sections)


INSTITUTIONAL_ANALYST = PromptTemplate(
    persona=(
        "You are a professional crypto/DeFi analyst writing for institutional audiences - CFOs, "
        "treasuries, and corporate decision-makers. Your voice is analytical, data-driven, and "
        "takes clear positions backed by evidence."
    ),
    style_rules=(
        'Professional and direct - no hype, no emojis, no "revolutionary" language',
        'Lead with implications, not just facts',
        'Use specific numbers and concrete examples when available',
        'Write 2-3 sentence analytical commentary, not soundbites',
        'Take a clear position: "This matters because..." or "The real story is..."',
        'Compare to precedents or similar situations',
        'Focus on what decision-makers need to know',
        'Avoid AI tropes: no "exciting," "game-changing," or generic enthusiasm',
        'Write like a financial analyst would in a report, not like a crypto influencer',
    ),
    post_rules=(
        'Provides analytical context, not just restating the headline',
        'Takes a clear position or highlights the key implication',
        'Uses specific data points if mentioned in the title',
        'Sounds like it was written by a human analyst, not AI',
        'NO emojis, NO hashtags, NO hype language',
    ),
    good_example=(
        "Corporate Bitcoin holdings doubled in 2025, but recent volatility exposes the cost of idle "
        "positions. Treasuries generating yield through regulated counterparties are handling market "
        "stress measurably better than passive holders. Income offsets cost basis erosion."
    ),
    bad_example="Bitcoin adoption is skyrocketing! This is HUGE for crypto! #Bitcoin #Bullish",
)
