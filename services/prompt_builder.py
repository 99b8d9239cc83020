# ─────────────────────────────────────────────────────────────────────────────
# File: prompt_builder.py
# Directory: services
# Purpose: Render the topic introduction prompt sent to the chat model.
#
# Upstream:
#   - ENV: —
#   - Imports: typing, services.topic_url
#
# Downstream:
#   - services.orchestrator
#
# Contents:
#   - topic_pair()
#   - display_topic()
#   - build_prompt()
# ─────────────────────────────────────────────────────────────────────────────
from typing import Optional, Tuple

from services.topic_url import topic_segments

PROMPT_TEMPLATE = """I will give you a topic and you need to write a brief introduction for that with regards to "{roadmap_title}". Your format should be as follows and be in strictly markdown format:

# (Put a heading for the topic without adding parent "Subtopic in Topic" or "Topic in Roadmap" etc.)

(Write me a brief introduction for the topic with regards to "{roadmap_title}")

(add any code snippets ONLY if necessary and makes sense)

"""


def _humanize(text: str) -> str:
    return text.replace("-", " ")


def topic_pair(topic_url: str) -> Tuple[str, Optional[str]]:
    """(parent, child) from the last two URL segments; child is None for top-level topics."""
    segments = [_humanize(s) for s in topic_segments(topic_url)[-2:]]
    if not segments:
        return "", None
    if len(segments) == 1:
        return segments[0], None
    return segments[0], segments[1]


def display_topic(topic_url: str) -> str:
    parent, child = topic_pair(topic_url)
    return child or parent


def build_prompt(topic_url: str, roadmap_title: str) -> str:
    parent, child = topic_pair(topic_url)
    prompt = PROMPT_TEMPLATE.format(roadmap_title=_humanize(roadmap_title))
    if child:
        return prompt + f"First topic is: {child} under {parent}"
    return prompt + f"First topic is: {parent}"
