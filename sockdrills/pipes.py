"""Two-way conversation between two parties over a pair of OS pipes."""

from __future__ import annotations

import argparse
import os
import threading

BUF_SIZE = 30
QUESTION = "who are you"
ANSWER = "thank you"


def _encode(text: str) -> bytes:
    # The terminating NUL travels with the message. Anything past what the
    # reader's buffer holds is never seen, so it is not written either.
    return (text.encode() + b"\0")[:BUF_SIZE]


def _decode(data: bytes) -> str:
    return data.split(b"\0", 1)[0].decode(errors="replace")


def exchange(question: str = QUESTION, answer: str = ANSWER) -> tuple[str, str]:
    """Have a helper send `question` through one pipe and read `answer` from another.

    Returns what the main side heard and what the helper side heard. Each read
    takes at most BUF_SIZE bytes.
    """
    question_r, question_w = os.pipe()
    answer_r, answer_w = os.pipe()
    heard_by_helper: list[str] = []

    def helper() -> None:
        os.write(question_w, _encode(question))
        heard_by_helper.append(_decode(os.read(answer_r, BUF_SIZE)))

    worker = threading.Thread(target=helper, daemon=True)
    try:
        worker.start()
        heard_by_main = _decode(os.read(question_r, BUF_SIZE))
        os.write(answer_w, _encode(answer))
        worker.join()
    finally:
        for fd in (question_r, question_w, answer_r, answer_w):
            os.close(fd)
    return heard_by_main, heard_by_helper[0]


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(prog="pipe-talk", description="Pipe conversation")
    parser.add_argument("--question", default=QUESTION)
    parser.add_argument("--answer", default=ANSWER)
    args = parser.parse_args(argv)

    parent, child = exchange(args.question, args.answer)
    print(f"parent : {parent}")
    print(f"child: {child}")
    return 0