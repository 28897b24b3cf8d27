"""Analyst prompt template for FX headline sentiment."""

PROMPT_TEMPLATE = """You are a senior foreign-exchange market analyst.
Assess the overall market sentiment for {pair} implied by the recent news headlines below.

Headlines (most recent first):
{headlines}

Instructions:
- Use only the headlines above; do not fabricate events.
- Score the sentiment for {pair} from -10 (strongly bearish) to 10 (strongly bullish); 0 is neutral.
- If coverage is sparse or mixed, favor Neutral with a score near 0.

Return ONLY a single JSON object with exactly this shape:
{{"score": number (-10 to 10), "outlook": "Bullish" | "Bearish" | "Neutral", "summary": string (1-2 sentences)}}

No markdown, no code fences, no commentary outside the JSON object."""


def build_prompt(pair: str, headlines: str) -> str:
    """Render the analyst prompt for ``pair`` around a rendered headline block.

    The output schema is fixed, so the same string is reused for every
    model candidate in a run.
    """
    return PROMPT_TEMPLATE.format(pair=pair, headlines=headlines)
