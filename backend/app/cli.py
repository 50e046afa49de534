"""Interactive terminal front-end for the survey form.

Type an answer and press Enter to record it for the current question.
Commands: ``:next``, ``:prev``, ``:submit``, ``:clear``, ``:q``.
"""

import argparse
import asyncio
from typing import Callable, Optional

from .clients.survey_api import SurveyApiClient
from .config import configure_logging
from .engines.survey import rules
from .engines.survey.catalog import Question, QuestionType
from .engines.survey.draft_store import FileDraftStore
from .engines.survey.form_engine import FormEngine
from .engines.survey.review import load_review


InputFn = Callable[[str], str]
OutputFn = Callable[[str], None]


def _progress_bar(fraction: float, width: int = 20) -> str:
    filled = round(fraction * width)
    return "[" + "#" * filled + "-" * (width - filled) + "]"


def render_question(engine: FormEngine) -> list[str]:
    question = engine.current_question
    lines = [
        f"{engine.step_label()} {_progress_bar(engine.completion_fraction())}",
        question.title,
    ]
    if question.description:
        lines.append(question.description)
    if question.type is QuestionType.SELECT:
        for position, option in enumerate(question.options, start=1):
            lines.append(f"  {position}. {option}")
    current = engine.get(question.id)
    if current:
        lines.append(f"Current answer: {current}")
    if question.id == rules.GENDER_FIELD and rules.requires_gender_other(engine.session.answers):
        lines.append(f"Specified: {engine.get(rules.GENDER_OTHER_FIELD) or '(blank)'}")
    if question.id == rules.BIO_FIELD:
        suffix = " (near limit)" if engine.bio_near_limit() else ""
        lines.append(f"{engine.bio_counter()} characters{suffix}")

    field_error = engine.field_error(question)
    if field_error:
        lines.append(f"! {field_error}")
    if not engine.is_form_valid():
        lines.append(f"{engine.completed_count()} of {engine.total} completed. Finish all to submit.")
    if engine.session.error:
        lines.append(f"! {engine.session.error}")
    return lines


def _resolve_option(question: Question, text: str) -> str:
    if text.isdigit():
        position = int(text)
        if 1 <= position <= len(question.options):
            return question.options[position - 1]
    for option in question.options:
        if option.lower() == text.strip().lower():
            return option
    return text


def apply_input(engine: FormEngine, text: str, read: InputFn) -> None:
    question = engine.current_question
    if question.type is QuestionType.SELECT:
        engine.set_answer(question.id, _resolve_option(question, text))
    else:
        engine.set_answer(question.id, text)
    engine.mark_touched(question.id)

    if question.id == rules.GENDER_FIELD and rules.requires_gender_other(engine.session.answers):
        engine.set_gender_other(read("Please specify your gender: "))
        engine.mark_touched(rules.GENDER_OTHER_FIELD)


def run_form(
    engine: FormEngine,
    client: SurveyApiClient,
    read: InputFn = input,
    write: OutputFn = print,
) -> Optional[int]:
    """Drive ``engine`` until a submission succeeds or the user quits."""
    while True:
        for line in render_question(engine):
            write(line)
        try:
            text = read("> ")
        except EOFError:
            return None
        command = text.strip()

        if command == ":q":
            return None
        if command == ":prev":
            engine.retreat()
        elif command == ":next":
            engine.advance()
        elif command == ":clear":
            engine.reset_draft()
        elif command == ":submit":
            response_id = asyncio.run(engine.submit())
            if response_id is not None:
                print_review(client, response_id, write)
                return response_id
        else:
            try:
                apply_input(engine, text, read)
            except EOFError:
                return None
            if not engine.is_last_step:
                engine.advance()
        write("")


def print_review(client: SurveyApiClient, response_id: int, write: OutputFn = print) -> bool:
    result = asyncio.run(load_review(client, response_id))
    if not result.ok:
        write(f"! {result.error}")
        return False
    write(result.text or "")
    return True


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Fill in the survey from the terminal.")
    parser.add_argument("--api-url", default=None, help="Response store base URL")
    parser.add_argument("--draft-dir", default=None, help="Directory holding the local draft")
    parser.add_argument("--review", type=int, default=None, help="Only print the stored response with this id")
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging()
    client = SurveyApiClient(args.api_url)

    if args.review is not None:
        return 0 if print_review(client, args.review) else 1

    engine = FormEngine(FileDraftStore(args.draft_dir), client)
    print("Survey: answer each question and press Enter (:next, :prev, :submit, :clear, :q)")
    response_id = run_form(engine, client)
    if response_id is None:
        print("Draft kept. Bye!")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
