# client/cli.py
import argparse
import getpass
import json
import logging
import os
import queue
import sys
import threading
from pathlib import Path
from typing import Callable, Dict, List, Optional

import httpx

from .api import ExamClient, ExamClientError
from .models import ExamFailed, ExamOutcome, ExamQuestion, ExamSubmitted, Session
from .timer import ExamTimer

logger = logging.getLogger(__name__)

DEFAULT_URL = os.getenv("EXAM_PORTAL_URL", "http://127.0.0.1:8000")
SESSION_FILE = Path(os.getenv("EXAM_PORTAL_SESSION", Path.home() / ".exam-portal" / "session.json"))


def save_session(session: Session, path: Path = SESSION_FILE):
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(session.model_dump_json(), encoding="utf-8")
    # holds a bearer token
    path.chmod(0o600)


def load_session(path: Path = SESSION_FILE) -> Session:
    if not path.exists():
        raise SystemExit("Not logged in. Run `exam-portal login` first.")
    return Session.model_validate_json(path.read_text(encoding="utf-8"))


class TimedInput:
    """
    Line reader that can give up waiting.

    A daemon thread does the blocking readline and hands lines over a queue,
    so the caller can stop waiting when the exam clock runs out. Returns None
    on timeout and raises EOFError once the stream is closed.
    """

    def __init__(self, stream=None, write: Callable[[str], None] = None):
        self._stream = stream or sys.stdin
        self._write = write or (lambda text: print(text, end="", flush=True))
        self._lines: queue.Queue = queue.Queue()
        self._thread: Optional[threading.Thread] = None

    def _pump(self):
        for line in iter(self._stream.readline, ""):
            self._lines.put(line)
        self._lines.put(None)

    def __call__(self, prompt: str, timeout: Optional[float] = None) -> Optional[str]:
        if self._thread is None:
            self._thread = threading.Thread(target=self._pump, daemon=True)
            self._thread.start()
        self._write(prompt)
        try:
            line = self._lines.get(timeout=timeout)
        except queue.Empty:
            return None
        if line is None:
            raise EOFError
        return line


def render_question(questions: List[ExamQuestion], index: int, answers: Dict[str, str], timer: ExamTimer) -> str:
    question = questions[index]
    clock = timer.format_remaining() + (" (hurry!)" if timer.running_low else "")
    lines = [
        "",
        f"[{clock}] Question {index + 1} of {len(questions)}  ({question.category}, {question.difficulty})",
        question.text,
    ]
    for number, option in enumerate(question.options, start=1):
        marker = "*" if answers.get(question.id) == option.id else " "
        lines.append(f" {marker} {number}. {option.text}")
    lines.append(f"Answered {len(answers)}/{len(questions)}. [1-{len(question.options)}] answer, n next, p previous, s submit")
    return "\n".join(lines)


def run_exam(client: ExamClient, session: Session, questions: List[ExamQuestion], timer: ExamTimer,
             read: Callable[[str, Optional[float]], Optional[str]] = None,
             write: Callable[[str], None] = print) -> ExamOutcome:
    """
    Walk the questions one at a time and submit.

    `read(prompt, timeout)` waits at most until the exam clock runs out and
    returns None if nothing was typed by then. Once time is up the collected
    answers are submitted as they stand, with or without a keypress.
    """
    read = read or TimedInput()
    answers: Dict[str, str] = {}
    index = 0
    timed_out = False

    while questions:
        write(render_question(questions, index, answers, timer))
        try:
            choice = read("> ", timer.remaining)
        except EOFError:
            break
        if choice is None or timer.expired:
            timed_out = True
            write("Time is up, submitting your answers.")
            break
        choice = choice.strip().lower()
        if choice == "s":
            break
        if choice == "n":
            index = min(index + 1, len(questions) - 1)
        elif choice == "p":
            index = max(index - 1, 0)
        elif choice.isdigit() and 1 <= int(choice) <= len(questions[index].options):
            question = questions[index]
            answers[question.id] = question.options[int(choice) - 1].id
            index = min(index + 1, len(questions) - 1)
        else:
            write("Unrecognised input.")

    try:
        result = client.submit(session, answers)
    except (ExamClientError, httpx.HTTPError) as e:
        logger.error(f"Failed to submit exam: {e}")
        return ExamFailed(message="Failed to submit exam. Please try again.", answered=len(answers))
    return ExamSubmitted(result=result, timedOut=timed_out)


def render_outcome(outcome: ExamOutcome, passing_percentage: int) -> str:
    if isinstance(outcome, ExamFailed):
        return f"{outcome.message} ({outcome.answered} answers were not recorded)"

    result = outcome.result
    lines = []
    if outcome.timedOut:
        lines.append("Time ran out before you submitted.")
    verdict = "PASSED" if result.passed else f"FAILED (you need {passing_percentage}% or higher to pass)"
    lines.append(f"Score: {result.score}/{result.totalQuestions} ({result.percentage}%) {verdict}")
    lines.append(f"Correct: {result.score}  Incorrect: {result.incorrect}")
    for number, item in enumerate(result.results, start=1):
        mark = "+" if item.isCorrect else "-"
        lines.append(f"{mark} {number}. {item.questionText}")
        lines.append(f"    your answer: {item.selectedOptionText}")
        if not item.isCorrect:
            lines.append(f"    correct answer: {item.correctOptionText}")
    return "\n".join(lines)


def cmd_register(client: ExamClient, args):
    password = getpass.getpass("Password: ")
    session = client.register(args.username, args.email, password)
    save_session(session)
    print(f"Welcome, {session.user.username}!")


def cmd_login(client: ExamClient, args):
    password = getpass.getpass("Password: ")
    session = client.login(args.email, password)
    save_session(session)
    print(f"Welcome back, {session.user.username}!")


def cmd_take(client: ExamClient, args):
    session = load_session()
    settings = client.settings()
    questions = client.fetch_questions(session, args.limit or settings.questionLimit)
    if not questions:
        print("No questions available. Seed the question bank first.")
        return
    print(f"{len(questions)} questions, {settings.durationSeconds // 60} minutes. Good luck, {session.user.username}!")
    outcome = run_exam(client, session, questions, ExamTimer(settings.durationSeconds))
    print(render_outcome(outcome, settings.passingPercentage))


def cmd_history(client: ExamClient, args):
    session = load_session()
    attempts = client.attempts(session)
    if not attempts:
        print("No attempts yet.")
    for attempt in attempts:
        print(f"{attempt.completedAt:%Y-%m-%d %H:%M}  {attempt.examId}  {attempt.score}/{attempt.totalQuestions}")


def cmd_seed(client: ExamClient, args):
    data = client.seed()
    print(json.dumps(data))


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="exam-portal", description="Take multiple-choice exams from the terminal")
    parser.add_argument("--url", default=DEFAULT_URL, help="Exam portal base URL")
    parser.add_argument("-v", "--verbose", action="store_true")
    sub = parser.add_subparsers(dest="command", required=True)

    register = sub.add_parser("register", help="Create an account")
    register.add_argument("username")
    register.add_argument("email")
    register.set_defaults(func=cmd_register)

    login = sub.add_parser("login", help="Log in and remember the session")
    login.add_argument("email")
    login.set_defaults(func=cmd_login)

    take = sub.add_parser("take", help="Take a timed exam")
    take.add_argument("--limit", type=int, default=None, help="Number of questions")
    take.set_defaults(func=cmd_take)

    sub.add_parser("history", help="List past attempts").set_defaults(func=cmd_history)
    sub.add_parser("seed", help="Seed the sample question bank").set_defaults(func=cmd_seed)
    return parser


def main(argv=None):
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=logging.INFO if args.verbose else logging.WARNING)
    with ExamClient(args.url) as client:
        try:
            args.func(client, args)
        except ExamClientError as e:
            print(f"Error: {e.message}", file=sys.stderr)
            return 1
        except httpx.HTTPError as e:
            print(f"Could not reach {args.url}: {e}", file=sys.stderr)
            return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
