import sys
from pathlib import Path

BACKEND_DIR = Path(__file__).resolve().parents[1]
if str(BACKEND_DIR) not in sys.path:
    sys.path.insert(0, str(BACKEND_DIR))

from app import cli
from app.engines.survey.draft_store import MemoryDraftStore
from app.engines.survey.form_engine import FormEngine
from app.engines.survey.errors import TransportError


class _FakeClient:
    def __init__(self, stored=None, fetch_error=None):
        self.stored = stored
        self.fetch_error = fetch_error
        self.submitted: list[dict[str, str]] = []

    async def submit_response(self, answers):
        self.submitted.append(dict(answers))
        self.stored = dict(answers)
        return len(self.submitted)

    async def fetch_response(self, response_id):
        if self.fetch_error is not None:
            raise self.fetch_error
        return self.stored


def _scripted(lines):
    pending = list(lines)

    def _read(_prompt):
        if not pending:
            raise EOFError
        return pending.pop(0)

    return _read


def test_run_form_happy_path_prints_review():
    client = _FakeClient()
    store = MemoryDraftStore()
    engine = FormEngine(store, client)
    output: list[str] = []

    response_id = cli.run_form(
        engine,
        client,
        read=_scripted(["30", "3", "Nonbinary", "hello there", ":submit"]),
        write=output.append,
    )

    assert response_id == 1
    assert client.submitted == [
        {"age": "30", "gender": "Other", "genderOther": "Nonbinary", "bio": "hello there"}
    ]
    assert store.load() == {}
    assert "Gender: Other — Nonbinary" in "\n".join(output)


def test_invalid_answer_stays_on_question_and_shows_error():
    client = _FakeClient()
    engine = FormEngine(MemoryDraftStore(), client)
    output: list[str] = []

    result = cli.run_form(engine, client, read=_scripted(["0", ":q"]), write=output.append)

    assert result is None
    assert engine.session.current_index == 0
    assert "! Age must be greater than 0." in output


def test_premature_submit_reports_incomplete_form():
    client = _FakeClient()
    engine = FormEngine(MemoryDraftStore(), client)
    output: list[str] = []

    cli.run_form(engine, client, read=_scripted(["25", ":submit"]), write=output.append)

    assert client.submitted == []
    assert "! Please complete all fields." in output


def test_select_accepts_option_name_and_clear_resets():
    client = _FakeClient()
    store = MemoryDraftStore()
    engine = FormEngine(store, client)

    cli.run_form(engine, client, read=_scripted(["30", "female", ":clear"]), write=lambda _line: None)

    assert engine.session.answers == {}
    assert engine.session.current_index == 0
    assert store.load() == {}


def test_render_question_shows_bio_counter():
    engine = FormEngine(MemoryDraftStore(), _FakeClient())
    engine.set_answer("age", "30")
    engine.set_answer("gender", "Male")
    engine.advance()
    engine.advance()
    engine.set_answer("bio", "ab cd")

    lines = cli.render_question(engine)

    assert lines[0].startswith("Question 3 of 3")
    assert "4/500 characters" in lines


def test_print_review_reports_errors():
    output: list[str] = []
    ok = cli.print_review(_FakeClient(fetch_error=TransportError("HTTP 404", status=404)), 999, output.append)
    assert ok is False
    assert output == ["! HTTP 404"]


def test_eof_at_gender_prompt_ends_form_and_keeps_draft():
    client = _FakeClient()
    store = MemoryDraftStore()
    engine = FormEngine(store, client)

    result = cli.run_form(engine, client, read=_scripted(["30", "Other"]), write=lambda _line: None)

    assert result is None
    assert client.submitted == []
    assert store.load() == {"age": "30", "gender": "Other"}
