import json
import re
from typing import Any

SYSTEM_MESSAGE = "You are a professional journalist and interviewing expert. Always respond with valid JSON only."

JSON_ONLY = (
    "IMPORTANT: Respond ONLY with valid JSON. Do not include any text outside the JSON structure. "
    "Do not use markdown code blocks or backticks. Your entire response must be a single valid JSON object."
)

GENERATE_TEMPLATE = """You are a professional journalist and interviewing expert. Your role is to create excellent podcast interview questions based on journalism best practices.

PODCAST AUDIENCE:
{audience}

GUEST BIO:
{guest_bio}

Please generate 8-12 thoughtful, engaging interview questions for this podcast. For your response, use the following JSON structure:

{{
  "introduction": "A brief 2-3 sentence explanation of your approach to these questions",
  "questions": [
    {{
      "question": "the interview question",
      "purpose": "what this question aims to achieve",
      "followUpSuggestion": "a suggestion for a potential follow-up question or direction"
    }}
  ],
  "journalismPrinciples": ["principle 1 applied", "principle 2 applied", "principle 3 applied"],
  "interviewTips": ["tip 1 for conducting this interview", "tip 2", "tip 3"]
}}

{json_only}"""

CRITIQUE_TEMPLATE = """You are a professional journalist and interviewing expert. Your role is to provide constructive criticism and help improve podcast interview questions based on journalism best practices.

PODCAST AUDIENCE:
{audience}

GUEST BIO:
{guest_bio}

INTERVIEW QUESTIONS:
{questions}

Please analyze these questions and provide detailed feedback. For your response, use the following JSON structure:

{{
  "overallAssessment": "A brief 2-3 sentence overall assessment of the questions",
  "strengths": ["strength 1", "strength 2", "strength 3"],
  "areasForImprovement": ["area 1", "area 2", "area 3"],
  "questionFeedback": [
    {{
      "original": "the original question text",
      "feedback": "specific feedback about this question",
      "improved": "your improved version of the question",
      "reasoning": "why this improvement works better"
    }}
  ],
  "journalismPrinciples": ["principle 1 applied", "principle 2 applied", "principle 3 applied"],
  "additionalTips": ["tip 1", "tip 2", "tip 3"]
}}

{json_only}"""

TEMPERATURE = 0.7
MAX_TOKENS = 4000

_FENCE = re.compile(r"```(?:json)?\n?")


class QuestionInputError(ValueError):
    pass


class QuestionParseError(ValueError):
    pass


def build_prompt(audience: str, guest_bio: str, questions: str = "", generate_mode: bool = False) -> str:
    if not audience.strip() or not guest_bio.strip():
        raise QuestionInputError("Please fill in audience and guest bio fields.")
    if generate_mode:
        return GENERATE_TEMPLATE.format(audience=audience, guest_bio=guest_bio, json_only=JSON_ONLY)
    if not questions.strip():
        raise QuestionInputError('Please enter your questions or use generate mode ("Come up with questions for me").')
    return CRITIQUE_TEMPLATE.format(audience=audience, guest_bio=guest_bio, questions=questions, json_only=JSON_ONLY)


def build_chat_request(
    audience: str,
    guest_bio: str,
    questions: str = "",
    generate_mode: bool = False,
    model: str = "gpt-4o",
) -> dict:
    """Chat-completion body the question form sends through the proxy."""
    return {
        "model": model,
        "messages": [
            {"role": "system", "content": SYSTEM_MESSAGE},
            {"role": "user", "content": build_prompt(audience, guest_bio, questions, generate_mode)},
        ],
        "temperature": TEMPERATURE,
        "max_tokens": MAX_TOKENS,
        "response_format": {"type": "json_object"},
    }


def parse_feedback(content: str) -> dict:
    # Models sometimes wrap the object in markdown fences despite the instructions.
    text = _FENCE.sub("", content or "").strip()
    try:
        data = json.loads(text)
    except ValueError as e:
        raise QuestionParseError(f"Model reply is not valid JSON: {e}") from e
    if not isinstance(data, dict):
        raise QuestionParseError("Model reply must be a JSON object")
    return data


def parse_completion(completion: Any) -> dict:
    try:
        content = completion["choices"][0]["message"]["content"]
    except (KeyError, IndexError, TypeError) as e:
        raise QuestionParseError("Chat completion has no message content") from e
    return parse_feedback(content)
