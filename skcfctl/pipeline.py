"""Mutating command flow: confirm, submit, then optionally wait for completion."""

import logging
from dataclasses import dataclass
from typing import Any

from skcfctl.errors import AbortedError, SkcfError

logger = logging.getLogger(__name__)


@dataclass
class PipelineResult:
    """What a mutating command hands to output."""

    response: Any  # API response of the submit call (None in dry-run)
    waited: Any = None  # result of the wait, None when not waited
    async_mode: bool = False
    dry_run: bool = False

    @property
    def name(self):
        return (self.response or {}).get("name")


def confirm(prompt, input_fn=None):
    """Ask a yes/no question on the terminal. Only 'y' and 'yes' count as yes."""
    input_fn = input_fn or input
    try:
        answer = input_fn(f"{prompt} [y/N]: ")
    except EOFError:
        return False
    return answer.strip().lower() in ("y", "yes")


async def run_mutation(
    submit,
    *,
    confirm_prompt=None,
    assume_yes=False,
    wait=None,
    async_mode=False,
    dry_run=False,
    prompt_fn=confirm,
):
    """Run one mutating command.

    Args:
        submit: async callable issuing the mutating request. Its response
            must carry the operation's ``name``.
        confirm_prompt: question asked before submitting; None skips it.
        assume_yes: caller pre-authorized the action, skip the prompt.
        wait: async callable ``wait(name)``; invoked unless *async_mode*.
        async_mode: return right after submission.
        dry_run: submit is expected to only log; never wait.
        prompt_fn: confirmation callable, injectable for tests.

    Returns:
        PipelineResult.

    Raises:
        AbortedError: the user declined the prompt; nothing was submitted.
    """
    if confirm_prompt and not assume_yes and not dry_run:
        if not prompt_fn(confirm_prompt):
            raise AbortedError()

    response = await submit()

    if dry_run:
        if wait is not None and not async_mode:
            logger.info("[dry-run] Would wait for the operation to finish.")
        return PipelineResult(response=response, async_mode=async_mode, dry_run=True)

    result = PipelineResult(response=response, async_mode=async_mode)
    name = result.name
    if not name:
        raise SkcfError("API response does not contain the operation name")

    if async_mode or wait is None:
        return result

    result.waited = await wait(name)
    return result
