"""
Builds the instruction prompt sent to the generative model for an evaluation.

The prompt is a pure function of (gender, answers, lang): identical inputs
always render byte-identical text, which keeps the output snapshot-testable.
"""
import re
from typing import Mapping

from src.evaluation.love_chain import LOVE_CHAIN_ORDER, describe_chain

# Control characters other than \t and \n would let a client break the prompt layout.
_CONTROL_CHARS = re.compile(r"[\x00-\x08\x0b-\x1f\x7f]")
_LINE_BREAKS = re.compile(r"[\r\n]+")

RESULT_KEYS = ("type", "explanation", "advice", "next_type", "love_chain_info")

EXAMPLE_OUTPUT = """{
  "type": "teto-boy",
  "explanation": "Paragraph 1 about personality.\\n\\nParagraph 2 about behavior.",
  "advice": "Paragraph about advice.\\n\\nAnother paragraph.",
  "next_type": "egen-girl",
  "love_chain_info": "Teto-boys are naturally attracted to egen-girls because they provide emotional balance...\\n\\nExplain behavioral pattern next."
}"""


def _clean(value, single_line: bool = True) -> str:
    text = _CONTROL_CHARS.sub("", str(value))
    if single_line:
        text = _LINE_BREAKS.sub(" ", text)
    return text.strip()


def render_answers(answers: Mapping[str, str]) -> str:
    """One 'question: answer' line per entry, in the order received."""
    return "\n".join(f"{_clean(question)}: {_clean(answer)}" for question, answer in answers.items())


def build_evaluation_prompt(gender: str, answers: Mapping[str, str], lang: str) -> str:
    type_list = ", ".join(f'"{member.value}"' for member in LOVE_CHAIN_ORDER)
    keys_list = ", ".join(f'"{key}"' for key in RESULT_KEYS)

    sections = [
        "Based on the following gender and answers, please evaluate the user's personality.",
        f"Gender: {_clean(gender)}\nAnswers:\n{render_answers(answers)}",
        f"Choose exactly one personality type: {type_list}.",
        (
            "The Love Food Chain is a fixed cycle in which each type is attracted to the next one:\n"
            f"{describe_chain()}\n"
            "\"next_type\" must be the type that directly follows the chosen \"type\" in this cycle."
        ),
        (
            f"Respond ONLY with strictly valid JSON containing exactly these keys: {keys_list}.\n"
            "- \"type\": the chosen type.\n"
            "- \"explanation\": describe how their answers reflect this type.\n"
            "- \"advice\": give practical guidance for this type.\n"
            "- \"next_type\": the next type in the Love Food Chain.\n"
            "- \"love_chain_info\": explain why this type is attracted to next_type, from an egen/teto "
            "perspective, with emotional and behavioral reasoning.\n"
            f"Write every text value in this language: {_clean(lang)}\n"
            "Keep the type values exactly as 'egen-boy', 'egen-girl', 'teto-boy' and 'teto-girl'; "
            "never translate them.\n"
            "Separate paragraphs inside each text value with line breaks for readability."
        ),
        (
            "Example output (illustrates tone and structure only, do not copy it):\n"
            f"{EXAMPLE_OUTPUT}"
        ),
    ]
    return "\n\n".join(sections)
