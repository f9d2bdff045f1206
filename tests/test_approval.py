import io

import pytest

from memory_cultivation.cultivation.approval import INVALID_CHOICE, PromptSession, prompt_for_approval
from memory_cultivation.cultivation.types import ApprovalDecision, BatchInfo, Err, Ok
from memory_cultivation.errors import InputClosedError

from tests.conftest import make_session

_INFO = BatchInfo(batch_number=2, total_batches=3, file_count=20)


@pytest.mark.parametrize(
    "answer,expected",
    [
        ("y", ApprovalDecision.approve()),
        ("  Y  ", ApprovalDecision.approve()),
        ("n", ApprovalDecision.skip()),
        ("retry", ApprovalDecision.retry()),
        ("RETRY", ApprovalDecision.retry()),
    ],
)
def test_single_answer_decisions(answer: str, expected: ApprovalDecision) -> None:
    session, _ = make_session(answer)
    assert prompt_for_approval(session, Ok("text"), _INFO) == expected


def test_edit_returns_approve_with_trimmed_custom_text() -> None:
    session, out = make_session("edit", "  my own summary  ")
    decision = prompt_for_approval(session, Ok("ai text"), _INFO)
    assert decision == ApprovalDecision("approve", "my own summary")
    assert "Enter your custom summary" in out.getvalue()


def test_edit_with_empty_text_is_still_an_approval() -> None:
    session, _ = make_session("edit", "")
    assert prompt_for_approval(session, Ok("ai text"), _INFO) == ApprovalDecision("approve", "")


def test_invalid_answers_reprompt_until_valid() -> None:
    session, out = make_session("maybe", "", "yes", "n")
    decision = prompt_for_approval(session, Ok("text"), _INFO)
    assert decision.action == "skip"
    assert out.getvalue().count(INVALID_CHOICE) == 3
    assert out.getvalue().count("Your choice: ") == 4


def test_presentation_shows_batch_metadata_text_and_menu() -> None:
    session, out = make_session("n")
    prompt_for_approval(session, Err("Error reading file x.md: boom"), _INFO)
    shown = out.getvalue()
    assert "=== Batch 2/3 Consolidation ===" in shown
    assert "Files: 20" in shown
    assert "Error reading file x.md: boom" in shown
    for option in ("y - Approve", "n - Skip", "edit - Write", "retry - Regenerate"):
        assert option in shown


def test_closed_input_raises() -> None:
    session, _ = make_session()
    with pytest.raises(InputClosedError):
        prompt_for_approval(session, Ok("text"), _INFO)


def test_session_close_is_idempotent_and_blocks_further_questions() -> None:
    session = PromptSession(io.StringIO("y\n"), io.StringIO())
    with session:
        pass
    session.close()
    assert session.closed
    with pytest.raises(InputClosedError):
        session.ask("again? ")


def test_edit_reads_multi_line_text_until_empty_line() -> None:
    session, _ = make_session("edit", "first line", "second line", "", "leftover")
    decision = prompt_for_approval(session, Ok("ai text"), _INFO)
    assert decision == ApprovalDecision("approve", "first line\nsecond line")
    assert session.ask("next? ") == "leftover"


def test_read_text_returns_collected_lines_at_end_of_input() -> None:
    out = io.StringIO()
    session = PromptSession(io.StringIO("one\ntwo\n"), out)
    assert session.read_text("Summary:\n") == "one\ntwo"
    assert out.getvalue() == "Summary:\n"


def test_read_text_raises_on_end_of_input_or_closed_session() -> None:
    session, _ = make_session()
    with pytest.raises(InputClosedError):
        session.read_text("Summary:\n")

    closed = PromptSession(io.StringIO("x\n"), io.StringIO())
    closed.close()
    with pytest.raises(InputClosedError):
        closed.read_text("Summary:\n")
