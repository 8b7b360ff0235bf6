"""Ready-made Threads specialist agent for the OpenAI Agents SDK."""
from __future__ import annotations

from typing import Iterable

from agents import Agent

from threads_tools.agent.tools import create_agent_tools
from threads_tools.manager import ThreadsManager

THREADS_SYSTEM_PROMPT = """You manage a Threads (Meta) account through tools.

- Publishing is irreversible: only post or reply when the user clearly asked you to,
  and use the exact text they approved.
- Media must already be hosted at a public URL; you cannot upload files.
- A carousel needs 2-10 items, each an IMAGE or VIDEO URL.
- Before a batch of posts, call threads_get_publishing_limit to check remaining quota.
- To read more replies, pass the previous page's paging.cursors.after as cursor.
- Report the ids of anything you publish.
- Always reply in English."""


def build_threads_agent(
    manager: ThreadsManager | None = None,
    *,
    model: str = "gpt-4o",
    include: Iterable[str] | None = None,
) -> Agent:
    return Agent(
        name="Threads Agent",
        handoff_description="Specialist for publishing to and reading from a Threads account.",
        instructions=THREADS_SYSTEM_PROMPT,
        model=model,
        tools=create_agent_tools(manager, include),
    )
