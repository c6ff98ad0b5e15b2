"""System/user prompt construction for one beat: base rules + style voice + beat guidance + recap."""
from __future__ import annotations

from dataclasses import dataclass

from storysprout.db.schemas.story import StoryContext
from storysprout.story.schema import FINAL_BEAT

BEAT_LABELS = (
    "Meet the Friend",
    "Something Happens",
    "Try a Thing",
    "Big Hooray",
    "Cozy Ending",
)

BEAT_GUIDANCE: dict[int, str] = {
    1: """This is "Meet the Friend": introduce the main character and the setting.
Give the character a name and a simple personality trait.
Paint the scene with 2-3 sensory details a toddler would love (colors, sounds, textures).""",
    2: """This is "Something Happens": a fun, surprising event occurs.
Build on the character and setting from beat 1.
The event should be exciting but NOT scary. Think "a rainbow appeared", not "a storm came".""",
    3: """This is "Try a Thing": the character tries something or explores.
Reference the child's previous choice naturally.
Show the character being brave, curious, or kind.""",
    4: """This is "Big Hooray": the happy success or delightful reveal.
This is the emotional peak, so make it joyful and satisfying.
Tie back to earlier beats so the story feels connected.
IMPORTANT: This is NOT the last beat. You MUST include a "question" and exactly 2 "options"; the child still has one more choice before the story ends.""",
    5: """This is "Cozy Ending": a calm, warm wrap-up.
Slow the pace down. Use gentle, sleepy language.
End with the character feeling safe, happy, and ready to rest.
Do NOT include a question or options. The story is complete.""",
}

DEFAULT_STYLE = "calm-bedtime"

STYLE_INSTRUCTIONS: dict[str, str] = {
    "whimsical-rhyme": """STYLE: Whimsical Rhyme
- Write in bouncy rhyming couplets (AABB pattern)
- Use playful repetition kids can chant along with
- Sprinkle in fun nonsense words (e.g., "snippety-snap", "wobbleflop")
- Keep the rhythm sing-songy and musical
- The question and options should also have a playful tone (but don't need to rhyme)""",
    "calm-bedtime": """STYLE: Calm Bedtime
- Use slow, gentle pacing with short, soft sentences
- Include sensory details: warm blankets, twinkling stars, soft breezes
- Tone should be soothing and reassuring, like a whispered story
- Use words like "gently", "softly", "quietly", "snuggled"
- The question should feel calm, never urgent""",
    "silly-goofy": """STYLE: Silly & Goofy
- Use funny sound effects (SPLAT! BOING! WHOOOOSH!)
- Include absurd, exaggerated situations that make kids giggle
- Playful exaggeration is great: "a sandwich the size of a mountain"
- Physical comedy works well: tripping, silly dances, funny faces
- The question options should both sound hilarious""",
}

BASE_SYSTEM_PROMPT = """You are a bedtime story narrator for children aged 3-5. You create warm, imaginative, interactive stories.

ABSOLUTE RULES (NEVER BREAK THESE):
- Content must be 100% appropriate for ages 3-5
- NO violence, danger, fear, sadness, villains, darkness, monsters, getting lost, or being alone
- NO conflict between characters; everyone is kind and helpful
- BOTH choice options must lead to equally happy, positive outcomes
- Use simple vocabulary a 3-year-old can understand
- Keep sentences short (under 15 words each)
- Each beat's story segment must be 80-120 words

RESPONSE FORMAT: Return ONLY valid JSON, no markdown, no code fences:
{
  "beat": <beat number 1-5>,
  "segment": "<the story text for this beat>",
  "question": "<question for the child>",
  "options": ["<option 1>", "<option 2>"]
}

CRITICAL: Beats 1-4 MUST include a non-null "question" and exactly 2 "options".
Beat 5 (and ONLY beat 5) must have "question": null and "options": [].

CHOICE DESIGN:
- Questions should be simple and engaging, e.g. "What should Pepper do next?"
- Each option should be 3-8 words
- Options must be concrete actions, not abstract concepts
- Both options must be equally appealing and lead to happy outcomes"""


@dataclass(frozen=True)
class PreviousBeat:
    beat_number: int
    segment: str
    chosen_option: str | None


@dataclass(frozen=True)
class PromptContext:
    style_slug: str
    theme_name: str
    beat_number: int
    previous_beats: tuple[PreviousBeat, ...] = ()


@dataclass(frozen=True)
class PromptBundle:
    system_prompt: str
    user_message: str
    next_beat_number: int


def build_system_prompt(ctx: PromptContext) -> str:
    style = STYLE_INSTRUCTIONS.get(ctx.style_slug, STYLE_INSTRUCTIONS[DEFAULT_STYLE])
    guidance = BEAT_GUIDANCE.get(ctx.beat_number, "")
    return (
        f"{BASE_SYSTEM_PROMPT}\n\n"
        f"{style}\n\n"
        f"CURRENT BEAT: {ctx.beat_number} of {FINAL_BEAT}\n"
        f"{guidance}\n\n"
        f"THEME: {ctx.theme_name}"
    )


def build_user_message(ctx: PromptContext) -> str:
    if ctx.beat_number == 1:
        return (
            f"Begin a new {ctx.theme_name.lower()} story. This is beat 1 of {FINAL_BEAT}: "
            "introduce the main character and setting."
        )

    recap_parts = []
    for b in ctx.previous_beats:
        text = f"[Beat {b.beat_number}]\n{b.segment}"
        if b.chosen_option:
            text += f'\n> Child chose: "{b.chosen_option}"'
        recap_parts.append(text)
    recap = "\n\n".join(recap_parts)

    last_choice = ctx.previous_beats[-1].chosen_option if ctx.previous_beats else None
    instruction = f"Continue the story. This is beat {ctx.beat_number} of {FINAL_BEAT}."
    if last_choice:
        instruction += f' The child chose: "{last_choice}". Weave this choice into the story naturally.'
    if ctx.beat_number == FINAL_BEAT:
        instruction += " This is the final beat. Wrap up warmly. Do NOT include a question or options."

    return f"STORY SO FAR:\n{recap}\n\n{instruction}"


class PromptContextBuilder:
    """Derives prompts and the next beat number from stored story state plus the incoming choice."""

    def context_for(self, story: StoryContext, chosen_option: str | None) -> PromptContext:
        beats = story.beats
        last_number = len(beats)
        previous = tuple(
            PreviousBeat(
                beat_number=b.beat_number,
                segment=b.segment,
                # the incoming choice replaces whatever the latest beat had stored
                chosen_option=chosen_option if b.beat_number == last_number else b.chosen_option,
            )
            for b in beats
        )
        return PromptContext(
            style_slug=story.style_slug,
            theme_name=story.theme_name,
            beat_number=story.next_beat_number,
            previous_beats=previous,
        )

    def build(self, story: StoryContext, chosen_option: str | None) -> PromptBundle:
        ctx = self.context_for(story, chosen_option)
        return PromptBundle(
            system_prompt=build_system_prompt(ctx),
            user_message=build_user_message(ctx),
            next_beat_number=ctx.beat_number,
        )
