import asyncio
import json
import logging
from typing import Any, Awaitable, Callable, Optional

import httpx
import typer
from dotenv import load_dotenv
from rich.console import Console
from rich.logging import RichHandler

from threads_tools.errors import ThreadsError
from threads_tools.manager import ThreadsManager
from threads_tools.models import MediaType, ReplyControl
from threads_tools.registry import MINIMAL_TOOL_NAMES, TOOL_NAMES, build_tool_definitions

load_dotenv()
app = typer.Typer(help="Publish to and read from a Threads account.")
console = Console()


@app.callback()
def main(verbose: bool = typer.Option(False, "--verbose", "-v", help="Log every Graph API request")):
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
    )
    # httpx logs full URLs at INFO, access_token included.
    logging.getLogger("httpx").setLevel(logging.WARNING)


def _run(action: Callable[[ThreadsManager], Awaitable[Any]]) -> None:
    """Build a manager from the environment, run one action, print its JSON result."""

    async def _go() -> Any:
        manager = ThreadsManager.from_env()
        try:
            return await action(manager)
        finally:
            await manager.client.aclose()

    try:
        result = asyncio.run(_go())
    except (ThreadsError, httpx.HTTPError) as e:
        console.print(f"[bold red]Error:[/] {e}")
        raise typer.Exit(1)
    console.print_json(data=result)


@app.command()
def post(
    text: Optional[str] = typer.Argument(None, help="Post text (required for text-only posts)"),
    image: Optional[str] = typer.Option(None, "--image", help="Public image URL"),
    video: Optional[str] = typer.Option(None, "--video", help="Public video URL"),
    alt_text: Optional[str] = typer.Option(None, "--alt-text", help="Alt text for the media"),
    reply_control: Optional[ReplyControl] = typer.Option(None, "--reply-control", help="Who can reply"),
):
    if image and video:
        console.print("[bold red]Error:[/] pass only one of --image / --video")
        raise typer.Exit(1)
    media_type = MediaType.IMAGE if image else MediaType.VIDEO if video else MediaType.TEXT
    _run(lambda m: m.post_thread(
        text, media_type, image or video, alt_text=alt_text, reply_control=reply_control,
    ))


@app.command()
def reply(
    media_id: str = typer.Argument(help="ID of the thread to reply to"),
    text: str = typer.Argument(help="Reply text"),
):
    _run(lambda m: m.reply_to_thread(media_id, text))


@app.command()
def threads(limit: int = typer.Option(25, "--limit", "-n", min=1, max=50, help="Threads to list")):
    _run(lambda m: m.get_user_threads(limit))


@app.command()
def replies(
    media_id: str = typer.Argument(help="Thread / media ID"),
    limit: int = typer.Option(25, "--limit", "-n", min=1, max=50, help="Replies per page"),
    cursor: Optional[str] = typer.Option(None, "--cursor", help="paging.cursors.after from a previous page"),
):
    _run(lambda m: m.get_replies(media_id, limit, cursor))


@app.command()
def insights():
    _run(lambda m: m.get_user_insights())


@app.command()
def limit():
    _run(lambda m: m.get_publishing_limit())


@app.command()
def status(container_id: str = typer.Argument(help="Media container ID")):
    _run(lambda m: m.get_container_status(container_id))


@app.command()
def tools(minimal: bool = typer.Option(False, "--minimal", help="Only the four core tools")):
    """Print the tool catalog (names, descriptions, parameter schemas) as JSON."""
    names = MINIMAL_TOOL_NAMES if minimal else TOOL_NAMES
    catalog = [
        {"name": d.name, "description": d.description, "inputSchema": d.input_schema}
        for d in build_tool_definitions(names)
    ]
    typer.echo(json.dumps(catalog, indent=2))


@app.command()
def ask(
    prompt: str = typer.Argument(help="Instruction for the Threads agent"),
    model: str = typer.Option("gpt-4o", "--model", "-m", help="OpenAI model"),
):
    """Run the Threads agent once on a natural-language instruction."""
    from agents import Runner
    from agents.exceptions import AgentsException

    from threads_tools.agent.assistant import build_threads_agent

    async def _go() -> str:
        manager = ThreadsManager.from_env()
        try:
            agent = build_threads_agent(manager, model=model)
            with console.status("[bold green]Thinking..."):
                result = await Runner.run(agent, input=prompt)
            return str(result.final_output)
        finally:
            await manager.client.aclose()

    try:
        output = asyncio.run(_go())
    except (ThreadsError, httpx.HTTPError) as e:
        console.print(f"[bold red]Error:[/] {e}")
        raise typer.Exit(1)
    except AgentsException as e:
        # Tool failures come back wrapped by the runner; report the underlying error.
        cause = e.__cause__ if isinstance(e.__cause__, (ThreadsError, httpx.HTTPError)) else e
        console.print(f"[bold red]Error:[/] {cause}")
        raise typer.Exit(1)
    console.print(output)


if __name__ == "__main__":
    app()
