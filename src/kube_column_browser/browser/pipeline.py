"""Turn finished kubectl results into navigation state updates."""

from __future__ import annotations

import structlog

from kube_column_browser.browser.commands import (
    COLUMN_FOR_TAG,
    SPLIT_MODES,
    CommandResult,
    CommandTag,
    SplitMode,
)
from kube_column_browser.browser.state import NavigationState
from kube_column_browser.integrations.kubernetes.exceptions import (
    CommandFailedError,
    OutputNotTextError,
)

logger = structlog.get_logger()


def guard_exit_code(exit_code: int | None, stderr: bytes) -> None:
    """Raise CommandFailedError for a present, non-zero exit code."""
    if exit_code is None or exit_code == 0:
        return
    try:
        stderr_text = stderr.decode("utf-8")
    except UnicodeDecodeError as e:
        stderr_text = f"Error parsing stderr: {e}\n{stderr.decode('utf-8', errors='replace')}"
    raise CommandFailedError(stderr_text, exit_code=exit_code)


def decode_output(stdout: bytes) -> str:
    """Decode stdout as UTF-8, raising OutputNotTextError on failure."""
    try:
        return stdout.decode("utf-8")
    except UnicodeDecodeError as e:
        raise OutputNotTextError(str(e)) from e


def split_output(text: str, mode: SplitMode) -> list[str]:
    """Tokenize command output into unique items, keeping first-seen order.

    Duplicates come from the resource kinds query, which reports a kind once
    per object. Line mode splits on newline characters only, so other Unicode
    line separators inside a YAML value stay on their row.
    """
    if mode == SplitMode.WHITESPACE:
        tokens = text.split()
    else:
        tokens = text.split("\n")
        if tokens[-1] == "":
            tokens.pop()
    return list(dict.fromkeys(tokens))


def parse_result(tag: CommandTag, result: CommandResult) -> list[str]:
    """Validate and decode a result into the item list for its column.

    Raises:
        CommandFailedError: If the command exited non-zero.
        OutputNotTextError: If stdout is not valid UTF-8.
    """
    guard_exit_code(result.exit_code, result.stderr)
    return split_output(decode_output(result.stdout), SPLIT_MODES[tag])


def apply_result(state: NavigationState, result: CommandResult) -> bool:
    """Commit a finished command to the column it was issued for.

    Results with a foreign tag, or issued for a column generation that has
    since been invalidated, are dropped.

    Args:
        state: Navigation state to update.
        result: The finished command.

    Returns:
        True if the state was updated, False if the result was dropped.

    Raises:
        CommandFailedError: If the command exited non-zero. State is unchanged.
        OutputNotTextError: If stdout is not valid UTF-8. State is unchanged.
    """
    tag = CommandTag.parse(result.tag)
    if tag is None:
        logger.debug("unknown_command_tag_dropped", tag=result.tag)
        return False

    kind = COLUMN_FOR_TAG[tag]
    if result.generation is not None and not state.is_current(kind, result.generation):
        logger.debug(
            "stale_result_dropped",
            tag=tag.value,
            generation=result.generation,
            current=state.column(kind).generation,
        )
        return False

    items = parse_result(tag, result)
    state.commit(kind, items)
    logger.debug("result_applied", tag=tag.value, count=len(items))
    return True
