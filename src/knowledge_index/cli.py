"""
Command-line interface for the knowledge index.

Builds the engine over a local context directory when a command runs and
prints engine results as JSON. Logs go to stderr.

Usage:
    knowledge-index -p ./context search "release"
    knowledge-index -p ./context execute deploy/release
"""

import asyncio
import functools
import logging
import logging.config
from pathlib import Path

import click
from rich.console import Console

from knowledge_index.config import IndexConfig
from knowledge_index.core.engine import KnowledgeEngine
from knowledge_index.models import BaseError, Collection

logger = logging.getLogger(__name__)

console = Console()
error_console = Console(stderr=True)

COLLECTION_CHOICE = click.Choice([c.value for c in Collection])


def build_engine(context_path: Path | None, verbose: bool) -> KnowledgeEngine:
    """Create the configuration, set up logging and run the initialization phase."""
    overrides = {"context_path": context_path} if context_path else {}
    if verbose:
        overrides["debug_mode"] = True
    config = IndexConfig(**overrides)
    logging.config.dictConfig(config.get_log_config())

    engine = KnowledgeEngine(config)
    asyncio.run(engine.initialize())
    return engine


def pass_engine(command):
    """Initialize the engine when a command runs and pass it as the first argument."""

    @click.pass_context
    def wrapper(ctx: click.Context, *args, **kwargs):
        try:
            engine = build_engine(**ctx.obj)
        except BaseError as e:
            error_console.print(f"[red]Failed to start:[/red] {e}")
            ctx.exit(1)
        return ctx.invoke(command, engine, *args, **kwargs)

    return functools.update_wrapper(wrapper, command)


def print_json(data) -> None:
    """Print a JSON-serializable object with rich highlighting."""
    console.print_json(data=data, default=str)


@click.group()
@click.option(
    '--context-path',
    '-p',
    type=click.Path(path_type=Path, file_okay=False),
    envvar='KNOWLEDGE_INDEX_CONTEXT_PATH',
    default=None,
    help='Directory containing the knowledge and task-templates collections',
)
@click.option('--verbose', '-v', is_flag=True, help='Enable verbose logging')
@click.pass_context
def main(ctx: click.Context, context_path: Path | None, verbose: bool):
    """Query a markdown knowledge base from the command line."""
    ctx.obj = {"context_path": context_path, "verbose": verbose}


@main.command()
@click.argument('query')
@pass_engine
def search(engine: KnowledgeEngine, query: str):
    """Rank task templates against QUERY."""
    print_json(engine.search(query).model_dump(mode="json"))


@main.command()
@click.option('--detailed', '-d', is_flag=True, help='Include name, example and parameters')
@click.option('--collection', '-c', type=COLLECTION_CHOICE, default=Collection.TASKS.value)
@pass_engine
def catalog(engine: KnowledgeEngine, detailed: bool, collection: str):
    """List every document of a collection sorted by id."""
    if detailed and collection == Collection.TASKS.value:
        entries = engine.list_task_templates()
    else:
        entries = engine.list_catalog(Collection(collection))
    print_json([entry.model_dump(mode="json") for entry in entries])


@main.command()
@click.argument('task_id')
@pass_engine
def execute(engine: KnowledgeEngine, task_id: str):
    """Show task template TASK_ID with its knowledge dependencies."""
    print_json(engine.execute(task_id).model_dump(mode="json"))


@main.command()
@click.argument('document_id')
@click.option('--collection', '-c', type=COLLECTION_CHOICE, default=Collection.KNOWLEDGE.value)
@pass_engine
def show(engine: KnowledgeEngine, document_id: str, collection: str):
    """Show one document by id."""
    print_json(engine.get_document(document_id, Collection(collection)).model_dump(mode="json"))


@main.command()
@click.argument('document_id')
@click.option('--collection', '-c', type=COLLECTION_CHOICE, default=Collection.KNOWLEDGE.value)
@pass_engine
def sections(engine: KnowledgeEngine, document_id: str, collection: str):
    """Split one document into heading-bounded sections."""
    result = engine.get_sections(document_id, Collection(collection))
    if result is None:
        error_console.print(f'Document with ID "{document_id}" not found.')
        raise SystemExit(1)
    print_json([section.model_dump(mode="json") for section in result])


@main.command()
@pass_engine
def resources(engine: KnowledgeEngine):
    """List knowledge documents as resources."""
    print_json([resource.model_dump(mode="json") for resource in engine.list_knowledge_resources()])


@main.command()
@pass_engine
def status(engine: KnowledgeEngine):
    """Show engine status and statistics."""
    print_json(engine.get_status())


if __name__ == '__main__':
    main()
