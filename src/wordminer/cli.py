"""WordMiner CLI entry point.

Commands:
    import    Import article file(s) and store their statistics
    articles  List imported articles
    report    Show an article's vocabulary report
    overlap   Compare vocabulary across articles
    delete    Delete an article
    lookup    Look up a word in the dictionary
    vocab     Manage learner vocabulary labels
    backup    Copy the database to another file
    config    View/edit configuration
"""

import json
import logging
import sys
from pathlib import Path

import click
from rich.console import Console
from rich.table import Table

from wordminer import __version__
from wordminer.api import WordMiner
from wordminer.app_config import AppConfig
from wordminer.constants import (
    APP_NAME,
    ARTICLE_EXTENSIONS,
    DEFAULT_TOP_VOCAB_LIMIT,
    MAX_VOCAB_ROWS,
    ExitCode,
)
from wordminer.exceptions import (
    ArticleNotFoundError,
    ConfigError,
    InvalidLabelError,
    WordMinerError,
)
from wordminer.models import Tier, VocabLabel
from wordminer.utils.config import (
    get_config_path,
    get_value,
    load_config,
    parse_value,
    save_config,
    set_value,
)

console = Console()

LABEL_CHOICES = [label.value for label in VocabLabel]


def _fail(message: str, code: ExitCode = ExitCode.GENERAL_ERROR) -> None:
    console.print(f"[red]{message}[/red]")
    sys.exit(code)


def _exit_code_for(error: WordMinerError) -> ExitCode:
    if isinstance(error, ArticleNotFoundError):
        return ExitCode.FILE_NOT_FOUND
    if isinstance(error, (InvalidLabelError, ConfigError)):
        return ExitCode.INVALID_INPUT
    return ExitCode.STORAGE_ERROR


def _open_miner(ctx: click.Context) -> WordMiner:
    """Build a WordMiner from CLI options, then config, then app defaults."""
    obj = ctx.obj
    if "miner" in obj:
        return obj["miner"]

    config = load_config()
    app = AppConfig(obj.get("app") or get_value(config, "general.app", APP_NAME))
    db_path = obj.get("db") or get_value(config, "general.database") or app.database
    dictionary_dir = (
        obj.get("dictionary")
        or get_value(config, "general.dictionary_dir")
        or app.dictionary_dir
    )

    logging.getLogger(__name__).debug(f"Database: {db_path}, dictionary: {dictionary_dir}")
    miner = WordMiner.open(db_path, dictionary_dir)
    if len(miner.dictionary) == 0:
        console.print(
            f"[yellow]No dictionary loaded from {dictionary_dir}; "
            f"all words will be classified as {Tier.UNKNOWN.value}[/yellow]"
        )
    obj["miner"] = miner
    obj["config"] = config
    return miner


@click.group()
@click.version_option(version=__version__, prog_name="wordminer")
@click.option("--debug", is_flag=True, help="Enable debug logging")
@click.option("--app", help="App name for isolated storage (default: wordminer)")
@click.option("--db", "db_path", type=click.Path(), help="Database path")
@click.option(
    "--dictionary",
    "dictionary_dir",
    type=click.Path(),
    help="Folder containing the per-tier dictionary JSON files",
)
@click.pass_context
def main(
    ctx: click.Context,
    debug: bool,
    app: str | None,
    db_path: str | None,
    dictionary_dir: str | None,
) -> None:
    """WordMiner - Mine vocabulary from articles by difficulty tier."""
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    ctx.ensure_object(dict)
    ctx.obj["debug"] = debug
    ctx.obj["app"] = app
    ctx.obj["db"] = db_path
    ctx.obj["dictionary"] = dictionary_dir


# ============================================================================
# ARTICLE COMMANDS
# ============================================================================


@main.command("import")
@click.argument("files", nargs=-1, required=True, type=click.Path(exists=True, dir_okay=False))
@click.option("--encoding", default="utf-8", help="Text encoding of the files")
@click.pass_context
def import_articles(ctx: click.Context, files: tuple, encoding: str) -> None:
    """Import article file(s) and analyze their vocabulary.

    Examples:

        wordminer import article.txt

        wordminer import notes/*.md
    """
    try:
        miner = _open_miner(ctx)

        table = Table(title="Imported Articles")
        table.add_column("ID", justify="right", style="cyan")
        table.add_column("Title")
        table.add_column("Tokens", justify="right")
        table.add_column("Lemmas", justify="right")
        table.add_column(Tier.UNKNOWN.value, justify="right")

        for file in files:
            path = Path(file)
            if path.suffix.lower() not in ARTICLE_EXTENSIONS:
                console.print(f"[yellow]Importing non-text extension: {path.name}[/yellow]")
            article_id, result = miner.import_file(path, encoding=encoding)
            table.add_row(
                str(article_id),
                path.stem,
                str(result.total_tokens),
                str(result.distinct_lemmas),
                str(result.tier_counts.get(Tier.UNKNOWN, 0)),
            )

        console.print(table)

    except WordMinerError as e:
        _fail(f"Error: {e}", _exit_code_for(e))


@main.command("articles")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.pass_context
def list_articles(ctx: click.Context, as_json: bool) -> None:
    """List imported articles, newest first."""
    try:
        miner = _open_miner(ctx)
        articles = miner.list_articles()

        if as_json:
            click.echo(json.dumps([a.to_dict() for a in articles], indent=2))
            return

        if not articles:
            console.print("[dim]No articles imported yet[/dim]")
            return

        table = Table(title="Articles")
        table.add_column("ID", justify="right", style="cyan")
        table.add_column("Title")
        table.add_column("Created")
        table.add_column("Source", style="dim")
        for article in articles:
            table.add_row(str(article.id), article.title, article.created_at, article.path or "")
        console.print(table)

    except WordMinerError as e:
        _fail(f"Error: {e}", _exit_code_for(e))


@main.command("report")
@click.argument("article_id", type=int)
@click.option("--top", "top_n", type=int, default=None, help="Number of top lemmas to show")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.pass_context
def report(ctx: click.Context, article_id: int, top_n: int | None, as_json: bool) -> None:
    """Show the difficulty breakdown and top vocabulary of an article.

    --top defaults to reports.top_vocab_limit and is capped at
    reports.max_vocab_rows.
    """
    try:
        miner = _open_miner(ctx)
        cfg = ctx.obj["config"]
        if top_n is None:
            top_n = get_value(cfg, "reports.top_vocab_limit", DEFAULT_TOP_VOCAB_LIMIT)
        top_n = min(top_n, get_value(cfg, "reports.max_vocab_rows", MAX_VOCAB_ROWS))
        result = miner.article_report(article_id, top_n=top_n)

        if as_json:
            click.echo(json.dumps(result.to_dict(), indent=2, ensure_ascii=False))
            return

        console.print(f"\n[bold]Report - {result.article.title}[/bold]")
        console.print(f"[dim]Article ID: {result.article.id}[/dim]")
        console.print(f"[dim]Created: {result.article.created_at}[/dim]")
        console.print(f"Word count: {result.word_count}\n")

        breakdown = Table(title="Difficulty Breakdown")
        breakdown.add_column("Tier", style="cyan")
        breakdown.add_column("Words", justify="right")
        for tier, count in result.tier_breakdown.items():
            breakdown.add_row(tier.value, str(count))
        console.print(breakdown)

        vocab = Table(title="Top Vocabulary")
        vocab.add_column("Lemma", style="cyan")
        vocab.add_column("Count", justify="right")
        vocab.add_column("Tier")
        for stat in result.top_vocabulary:
            vocab.add_row(stat.lemma, str(stat.count), stat.tier.value)
        console.print(vocab)

    except WordMinerError as e:
        _fail(f"Error: {e}", _exit_code_for(e))


@main.command("overlap")
@click.argument("article_ids", nargs=-1, type=int)
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.pass_context
def overlap(ctx: click.Context, article_ids: tuple, as_json: bool) -> None:
    """Count unique and shared lemmas across articles.

    Examples:

        wordminer overlap 1 2 3
    """
    try:
        if not article_ids:
            console.print("[dim]Select one or more articles.[/dim]")
            return

        miner = _open_miner(ctx)
        result = miner.overlap(article_ids)
        if result is None:
            console.print("[dim]No statistics available.[/dim]")
            return

        if as_json:
            click.echo(json.dumps(result.to_dict(), indent=2))
            return

        console.print(f"Unique words total: {result.unique}")
        console.print(f"Shared across selection: {result.shared}")

    except WordMinerError as e:
        _fail(f"Error: {e}", _exit_code_for(e))


@main.command("delete")
@click.argument("article_id", type=int)
@click.pass_context
def delete(ctx: click.Context, article_id: int) -> None:
    """Delete an article and its statistics."""
    try:
        miner = _open_miner(ctx)
        miner.delete_article(article_id)
        console.print(f"[green]Deleted article {article_id}[/green]")

    except WordMinerError as e:
        _fail(f"Error: {e}", _exit_code_for(e))


@main.command("lookup")
@click.argument("word")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.pass_context
def lookup(ctx: click.Context, word: str, as_json: bool) -> None:
    """Look up a word's tier, translations and phrases."""
    try:
        miner = _open_miner(ctx)
        entry = miner.lookup(word)
        if entry is None:
            _fail(f"Not in dictionary: {word}", ExitCode.FILE_NOT_FOUND)
            return

        label = miner.get_label(entry.lemma)

        if as_json:
            data = entry.to_dict()
            data["label"] = label.value if label else None
            click.echo(json.dumps(data, indent=2, ensure_ascii=False))
            return

        console.print(f"[bold]{entry.lemma}[/bold] [dim]({entry.tier.value})[/dim]")
        console.print(f"Status: {label.value if label else 'unlabeled'}")
        for translation in entry.translations:
            pos = f"{translation.type}. " if translation.type else ""
            console.print(f"  {pos}{translation.translation}")
        if entry.phrases:
            console.print("Phrases:")
            for phrase in entry.phrases:
                console.print(f"  {phrase.phrase}: {phrase.translation}")

    except WordMinerError as e:
        _fail(f"Error: {e}", _exit_code_for(e))


@main.command("backup")
@click.argument("destination", type=click.Path())
@click.pass_context
def backup(ctx: click.Context, destination: str) -> None:
    """Copy the database to DESTINATION."""
    try:
        miner = _open_miner(ctx)
        written = miner.backup(destination)
        console.print(f"[green]Database copied to {written}[/green]")

    except WordMinerError as e:
        _fail(f"Error: {e}", _exit_code_for(e))


# ============================================================================
# VOCAB COMMAND
# ============================================================================


@main.group()
def vocab() -> None:
    """Vocabulary label commands.

    Labels are global: marking a lemma applies to every article.
    """
    pass


@vocab.command("mark")
@click.argument("lemma")
@click.argument("label", type=click.Choice(LABEL_CHOICES, case_sensitive=False))
@click.pass_context
def vocab_mark(ctx: click.Context, lemma: str, label: str) -> None:
    """Label LEMMA as mastered, learning or unfamiliar."""
    try:
        miner = _open_miner(ctx)
        stored = miner.set_label(lemma, label)
        console.print(f"[green]{lemma.strip().lower()} -> {stored.value}[/green]")

    except ValueError as e:
        _fail(f"Error: {e}", ExitCode.INVALID_INPUT)
    except WordMinerError as e:
        _fail(f"Error: {e}", _exit_code_for(e))


@vocab.command("clear")
@click.argument("lemma")
@click.pass_context
def vocab_clear(ctx: click.Context, lemma: str) -> None:
    """Remove LEMMA's label."""
    try:
        miner = _open_miner(ctx)
        if miner.ledger.clear_label(lemma):
            console.print(f"[green]Cleared label for {lemma}[/green]")
        else:
            console.print(f"[dim]{lemma} was not labeled[/dim]")

    except ValueError as e:
        _fail(f"Error: {e}", ExitCode.INVALID_INPUT)
    except WordMinerError as e:
        _fail(f"Error: {e}", _exit_code_for(e))


@vocab.command("show")
@click.argument("lemma")
@click.pass_context
def vocab_show(ctx: click.Context, lemma: str) -> None:
    """Show LEMMA's current label."""
    try:
        miner = _open_miner(ctx)
        label = miner.get_label(lemma)
        click.echo(label.value if label else "unlabeled")

    except ValueError as e:
        _fail(f"Error: {e}", ExitCode.INVALID_INPUT)
    except WordMinerError as e:
        _fail(f"Error: {e}", _exit_code_for(e))


@vocab.command("list")
@click.argument("label", type=click.Choice(LABEL_CHOICES, case_sensitive=False))
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.pass_context
def vocab_list(ctx: click.Context, label: str, as_json: bool) -> None:
    """List lemmas carrying LABEL, alphabetically."""
    try:
        miner = _open_miner(ctx)
        lemmas = miner.list_by_label(label)

        if as_json:
            click.echo(json.dumps(lemmas))
            return

        if not lemmas:
            console.print(f"[dim]No {label.lower()} words[/dim]")
            return
        for lemma in lemmas:
            click.echo(lemma)

    except WordMinerError as e:
        _fail(f"Error: {e}", _exit_code_for(e))


@vocab.command("stats")
@click.pass_context
def vocab_stats(ctx: click.Context) -> None:
    """Show article, dictionary and label counts."""
    try:
        miner = _open_miner(ctx)
        stats = miner.get_statistics()

        table = Table(title="WordMiner Statistics")
        table.add_column("Metric", style="cyan")
        table.add_column("Value", justify="right")

        table.add_row("Articles", str(stats["articles"]))
        table.add_row("Dictionary entries", str(stats["dictionary_entries"]))
        table.add_row("", "")
        for label, count in stats["labels"].items():
            table.add_row(f"  {label}", str(count))

        console.print(table)

    except WordMinerError as e:
        _fail(f"Error: {e}", _exit_code_for(e))


@vocab.command("export")
@click.argument("output", type=click.Path())
@click.pass_context
def vocab_export(ctx: click.Context, output: str) -> None:
    """Export all labels to a CSV file.

    OUTPUT is the destination file path.
    """
    try:
        miner = _open_miner(ctx)
        count = miner.export_vocabulary(output)
        console.print(f"[green]Exported {count} words to {output}[/green]")

    except OSError as e:
        _fail(f"Error: {e}", ExitCode.FILE_NOT_FOUND)
    except WordMinerError as e:
        _fail(f"Error: {e}", _exit_code_for(e))


# ============================================================================
# CONFIG COMMAND
# ============================================================================


@main.group()
def config() -> None:
    """View and edit configuration."""
    pass


@config.command("show")
def config_show() -> None:
    """Show current configuration."""
    try:
        cfg = load_config()
    except ConfigError as e:
        _fail(str(e), ExitCode.INVALID_INPUT)
        return
    console.print(f"[dim]{get_config_path()}[/dim]")
    console.print_json(json.dumps(cfg))


@config.command("get")
@click.argument("key")
def config_get(key: str) -> None:
    """Get a configuration value (dot notation)."""
    try:
        cfg = load_config()
    except ConfigError as e:
        _fail(str(e), ExitCode.INVALID_INPUT)
        return
    value = get_value(cfg, key)
    if value is None:
        _fail(f"Key not found: {key}", ExitCode.INVALID_INPUT)
        return
    click.echo(value)


@config.command("set")
@click.argument("key")
@click.argument("value")
def config_set(key: str, value: str) -> None:
    """Set a configuration value (dot notation).

    Examples:

        wordminer config set reports.top_vocab_limit 30

        wordminer config set general.dictionary_dir ~/dictionary
    """
    try:
        cfg = load_config()
    except ConfigError as e:
        _fail(str(e), ExitCode.INVALID_INPUT)
        return
    set_value(cfg, key, parse_value(value))
    save_config(cfg)
    console.print(f"[green]Set {key} = {value}[/green]")


if __name__ == "__main__":
    main()
