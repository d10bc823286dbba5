import argparse
import json
import logging
import sys

from openai import OpenAIError

from podcast_gateway.config.logging_setup import setup_logging
from podcast_gateway.config.settings import load_settings
from podcast_gateway.infra.openai_client import complete_chat
from podcast_gateway.service.question_service import (
    QuestionInputError,
    QuestionParseError,
    build_chat_request,
    parse_completion,
)

logger = logging.getLogger("optimize_questions")


def read_text(path):
    with open(path, "r", encoding="utf-8") as f:
        return f.read()


def build_parser():
    parser = argparse.ArgumentParser(description="Generate or critique podcast interview questions.")
    parser.add_argument("--audience", required=True, help="who listens to the podcast")
    bio = parser.add_mutually_exclusive_group(required=True)
    bio.add_argument("--guest-bio", dest="guest_bio")
    bio.add_argument("--guest-bio-file", dest="guest_bio_file")
    parser.add_argument("--questions-file", dest="questions_file", help="draft questions to critique")
    parser.add_argument("--generate", action="store_true", help="come up with questions instead of critiquing")
    parser.add_argument("--output", dest="output_file", help="write the JSON feedback here instead of stdout")
    return parser


def main(argv=None, settings=None):
    args = build_parser().parse_args(argv)
    settings = settings or load_settings()

    try:
        guest_bio = args.guest_bio if args.guest_bio is not None else read_text(args.guest_bio_file)
        questions = read_text(args.questions_file) if args.questions_file else ""
        request = build_chat_request(args.audience, guest_bio, questions, args.generate, model=settings.openai_model)
        mode = "Generating" if args.generate else "Critiquing"
        logger.info("%s questions with %s...", mode, settings.openai_model)
        feedback = parse_completion(complete_chat(request, settings))
    except (OSError, OpenAIError, QuestionInputError, QuestionParseError, RuntimeError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    text = json.dumps(feedback, ensure_ascii=False, indent=2)
    if args.output_file:
        with open(args.output_file, "w", encoding="utf-8") as f:
            f.write(text + "\n")
        print(f"Feedback saved to {args.output_file}")
    else:
        print(text)
    return 0


if __name__ == "__main__":
    setup_logging(load_settings())
    sys.exit(main())
