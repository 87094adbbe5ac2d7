# Prompt templates for the thought, chat and quote pipelines.
# Templates use str.format; stage outputs are interpolated by the pipeline.

THOUGHT_PROMPT = """\
Generate a realistic worrying thought that someone with anxiety might experience.
The thought should be:
- Specific and relatable (e.g., 'I'm going to fail this exam')
- Not too extreme or harmful
- Common among people with anxiety

Respond with ONLY the thought, nothing else. Keep it under 12 words."""

INTRO_PROMPT = """\
Write a short, supportive dialogue (2-3 lines) that introduces this worrying thought
to a player in an anxiety awareness game:

Worrying thought: "{thought}"

Be empathetic and validating, acknowledge the thought without judgment, and lead
into the choices that follow. Keep it under 50 words, as a single paragraph."""

OPTIONS_PROMPT = """\
Given this worrying thought: "{thought}"

Create 4 distinct player choices in this exact order:
1) Avoidance or escape that sounds doable but ends in a blocked path.
2) Self-criticism that invites trouble and offers no route upward.
3) Over-control that is possible but long, tiring, and roundabout.
4) A healthy, balanced cognitive reframe: the simplest, kindest way forward.

Write one short sentence for each (10 words or fewer).
Format exactly as 4 bullet lines, no labels:
- ...
- ...
- ...
- ..."""

EXPLANATIONS_PROMPT = """\
Given this worrying thought and 4 responses to it:

Thought: "{thought}"

Options:
1. {option1}
2. {option2}
3. {option3}
4. {option4}

Write a brief explanation for EACH option: why it helps or not, and where it leads.
For options 1-3 end with a gentle suggestion; for option 4 affirm it is a healthy choice.
Under 30 words each, encouraging tone.
Format exactly as 4 bullet lines, no labels:
- ...
- ...
- ...
- ..."""

STRUCTURED_PROMPT = """\
Generate content for one level of an anxiety awareness game.
Respond with ONLY a JSON object of this shape:
{
  "thought": "a relatable worrying thought, under 12 words",
  "introDialogue": "2-3 empathetic sentences introducing the thought",
  "options": [
    {"title": "...", "theme": "avoidance", "dialogue": "...", "optimal": false},
    {"title": "...", "theme": "self_criticism", "dialogue": "...", "optimal": false},
    {"title": "...", "theme": "over_control", "dialogue": "...", "optimal": false},
    {"title": "...", "theme": "reframe", "dialogue": "...", "optimal": true}
  ]
}
Exactly 4 options, one per theme, and only the reframe option is optimal.
Titles are 10 words or fewer; dialogue explains the outcome in under 30 words."""

EMPATHY_SYSTEM_PROMPT = """\
You are a compassionate mental-health support companion in a game. Your role is to:
1. Provide scientifically-grounded, empathetic support.
2. Validate the user's feelings and acknowledge their mental health journey.
3. Be warm, brief (2-3 sentences max), and avoid clinical jargon.
4. Never request personal information or store sensitive data.
5. Encourage self-awareness and healthy coping strategies.
6. Respect confidentiality and user autonomy."""

CHAT_USER_TEMPLATE = """\
User said: "{user_text}"

Respond in 2-3 sentences with empathy and support."""

QUOTE_PROMPT = (
    "Generate one short inspiring quote about mental health, anxiety, self-care, or wellness. "
    "Keep it uplifting and concise. Try to change the quotes up."
)


def build_options_prompt(thought: str) -> str:
    return OPTIONS_PROMPT.format(thought=thought)


def build_explanations_prompt(thought: str, options) -> str:
    o = list(options) + [""] * (4 - len(options))
    return EXPLANATIONS_PROMPT.format(
        thought=thought, option1=o[0], option2=o[1], option3=o[2], option4=o[3]
    )
