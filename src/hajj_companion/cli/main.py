from typing import Optional

import typer
import uvicorn
from rich.console import Console
from rich.table import Table

from hajj_companion.api.app import build_chat_service, create_app
from hajj_companion.config_provider import ConfigProvider
from hajj_companion.domain.exceptions import GatewayError, RetrievalError
from hajj_companion.domain.messages import ChatMessage
from hajj_companion.gateway.gateway_error_mapper import map_gateway_error
from hajj_companion.infra.utils import setup_logging
from hajj_companion.retrieval.factory import build_retriever
from hajj_companion.retrieval.local_retriever import LocalRetriever

app = typer.Typer(help="Hajj and Umrah guidance assistant.")
console = Console()


@app.command()
def retrieve(
    query: str,
    limit: Optional[int] = typer.Option(
        None, "--limit", "-l", min=0, help="Maximum number of knowledge items."
    ),
):
    """
    Print the knowledge context that would enrich a question.
    """
    config = ConfigProvider().load()
    setup_logging(config.log_level)
    retriever = build_retriever(config)
    try:
        if limit is not None and isinstance(retriever, LocalRetriever):
            retriever.limit = limit
        console.print(retriever.retrieve_context(query), markup=False)
    finally:
        retriever.close()


@app.command()
def search(query: str):
    """
    List the knowledge items matching a query.
    """
    config = ConfigProvider().load()
    setup_logging(config.log_level)
    retriever = build_retriever(config)
    try:
        table = Table(title=f"Results for '{query}'")
        table.add_column("Title")
        table.add_column("Category")
        table.add_column("Score", justify="right")
        if isinstance(retriever, LocalRetriever):
            rows = [
                (entry.item, str(entry.score))
                for entry in retriever.retrieve_scored(query)
            ]
        else:
            rows = [(item, "-") for item in retriever.retrieve(query)]
        if not rows:
            console.print("[yellow]No relevant knowledge found.[/yellow]")
            return
        for item, score in rows:
            table.add_row(item.title, item.category, score)
        console.print(table)
    except RetrievalError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(code=1)
    finally:
        retriever.close()


@app.command()
def chat(message: str):
    """
    Ask the assistant a single question and stream the answer.
    """
    config = ConfigProvider().load()
    setup_logging(config.log_level)
    service = build_chat_service(config)
    try:
        with service.stream([ChatMessage(role="user", content=message)]) as stream:
            for delta in stream.iter_text():
                console.print(delta, end="", markup=False, highlight=False)
        console.print()
    except GatewayError as e:
        console.print(f"[red]Error:[/red] {map_gateway_error(e).message}")
        raise typer.Exit(code=1)
    finally:
        service.close()


@app.command()
def serve(
    host: str = typer.Option("127.0.0.1", "--host", help="Interface to bind."),
    port: int = typer.Option(8000, "--port", "-p", help="Port to listen on."),
):
    """
    Run the HTTP API.
    """
    config = ConfigProvider().load()
    console.print(f"[bold green]Serving[/bold green] on http://{host}:{port}")
    uvicorn.run(create_app(config), host=host, port=port, log_config=None)


if __name__ == "__main__":
    app()
