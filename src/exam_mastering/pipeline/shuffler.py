"""
Deterministic shuffling of choice and dropdown options.

The order is derived from a SHA-256 hash of the option count, the
answer's question-id, the option's authored position and a secret, so
it can be reproduced by anyone holding the secret and never needs to be
stored. Keep the secret secret: with it the authored order (which often
lists the correct option first) can be recovered.
"""

import hashlib
import logging

from ..preprocess.structure import Exam

logger = logging.getLogger(__name__)


def _hash(value: str) -> str:
    return hashlib.sha256(value.encode("utf-8")).hexdigest()


def shuffle_answer_options(exam: Exam, secret: str) -> None:
    """
    Shuffle the options of every choice and dropdown answer in place.

    Answers with ordering="fixed" keep their order. An option with
    type="no-answer" always ends up last.
    """
    shuffled = 0
    for answer in exam.answers:
        if not answer.kind.is_choice or answer.element.get("ordering") == "fixed":
            continue

        options = answer.options
        answer_key = str(len(options)) + answer.element.get("question-id", "")
        keyed = [(_hash(answer_key + str(i) + secret), option) for i, option in enumerate(options)]
        sorted_options = [option for _, option in sorted(keyed, key=lambda pair: pair[0])]

        # append() moves an existing child to the end
        for option in sorted_options:
            answer.element.append(option)

        no_answer_option = next(
            (option for option in options if option.get("type", "normal") == "no-answer"), None
        )
        if no_answer_option is not None:
            answer.element.append(no_answer_option)

        shuffled += 1

    logger.debug(f"Shuffled options of {shuffled} answers")
