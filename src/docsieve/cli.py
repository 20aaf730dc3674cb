"""Click CLI for docsieve."""

import click

from docsieve.constants import VALID_CATEGORIES


def _setup_logging(verbose: bool) -> None:
    import logging

    if verbose:
        logging.basicConfig(level=logging.DEBUG)
    else:
        logging.basicConfig(level=logging.INFO)


def _resolve(base):
    """Settings from <base>/.docsieve/config.toml (defaults if absent)."""
    from docsieve.config import load_config, resolve_settings

    try:
        return resolve_settings(load_config(base))
    except (ValueError, RuntimeError) as e:
        raise click.UsageError(str(e)) from e


def _open_session(base_path):
    """Build a SearchSession for <base>; the fetcher is returned for closing."""
    from pathlib import Path

    from docsieve.config import cache_dir
    from docsieve.search.session import SearchSession
    from docsieve.sources.cache import FileCache
    from docsieve.sources.fetch import DocsFetcher

    base = Path(base_path).resolve()
    settings = _resolve(base)
    cache = FileCache(cache_dir(base), ttl_seconds=settings.cache_ttl_seconds)
    fetcher = DocsFetcher(settings.url, timeout=settings.timeout)
    return SearchSession(cache, fetcher, settings), fetcher


def _load(session, refresh: bool):
    """Load (or refresh) the index, reporting fetch and cache failures as CLI errors."""
    try:
        return session.refresh() if refresh else session.load()
    except RuntimeError as e:
        raise click.ClickException(str(e)) from e


def _format_category(category: str) -> str:
    from docsieve.constants import category_display

    icon, color = category_display(category)
    return click.style(f"{icon} {category}", fg=color)


@click.group()
def cli():
    """dsv: search a Markdown documentation corpus by section."""


@cli.command()
@click.argument("base_path", default=".", type=click.Path(exists=True))
def init(base_path):
    """Initialize a .docsieve directory with config.toml."""
    from pathlib import Path

    from docsieve.config import create_default_config

    base = Path(base_path).resolve()
    try:
        config_path = create_default_config(base)
    except FileExistsError as e:
        raise click.ClickException(str(e)) from e
    click.echo(f"Created {config_path}")

    # Ensure .docsieve/ is in .gitignore
    gitignore = base / ".gitignore"
    marker = ".docsieve/"
    if gitignore.exists():
        content = gitignore.read_text()
        if marker not in content:
            with open(gitignore, "a") as f:
                f.write(f"\n{marker}\n")
            click.echo(f"Added {marker} to .gitignore")
    else:
        gitignore.write_text(f"{marker}\n")
        click.echo(f"Created .gitignore with {marker}")


@cli.command()
@click.option("--base", "base_path", default=".", type=click.Path(exists=True), help="Directory holding .docsieve/.")
@click.option("--refresh", is_flag=True, help="Ignore the cached copy and refetch.")
@click.option("-v", "--verbose", is_flag=True, help="Verbose output.")
def index(base_path, refresh, verbose):
    """Fetch (or reuse) the docs and report what was indexed."""
    from docsieve.index.builder import category_counts

    _setup_logging(verbose)
    session, fetcher = _open_session(base_path)
    with fetcher:
        sections = _load(session, refresh)

    click.echo(f"Docs loaded from {session.source}: {len(sections)} sections indexed")
    for category, count in category_counts(sections).most_common():
        click.echo(f"  {count:>5}  {_format_category(category)}")


@cli.command()
@click.argument("query", default="")
@click.option("--base", "base_path", default=".", type=click.Path(exists=True), help="Directory holding .docsieve/.")
@click.option("--limit", type=int, default=None, help="Maximum results (defaults to [search] limit).")
@click.option("--category", type=click.Choice(sorted(VALID_CATEGORIES)), default=None, help="Only this category.")
@click.option("--detail", is_flag=True, help="Print each result's Markdown body.")
@click.option("--refresh", is_flag=True, help="Ignore the cached copy and refetch.")
@click.option("-v", "--verbose", is_flag=True, help="Verbose output.")
def search(query, base_path, limit, category, detail, refresh, verbose):
    """Rank documentation sections against QUERY."""
    _setup_logging(verbose)
    session, fetcher = _open_session(base_path)
    with fetcher:
        _load(session, refresh)

    if limit is None:
        limit = session.settings.search_limit
    if limit <= 0:
        raise click.UsageError(f"--limit must be > 0, got {limit}")

    results = session.search_with_scores(query, limit=limit, category=category)
    if not results:
        click.echo("No sections match")
        return

    for i, (section, score) in enumerate(results):
        score_str = "" if score is None else f" [{score}]"
        click.echo(
            f"{i:>3}. {_format_category(section.category)}  "
            f"{click.style(section.title, bold=True)}{score_str}  ({section.line_count} lines)"
        )
        click.echo(f"     {section.url}")
        if detail:
            click.echo("")
            click.echo(section.body)
            click.echo("")


@cli.command()
@click.argument("title")
@click.option("--base", "base_path", default=".", type=click.Path(exists=True), help="Directory holding .docsieve/.")
def show(title, base_path):
    """Print the Markdown body of the section titled TITLE."""
    session, fetcher = _open_session(base_path)
    with fetcher:
        _load(session, refresh=False)

    section = session.find_title(title)
    if section is None:
        raise click.ClickException(f"No section titled {title!r}")
    click.echo(f"# {section.title}  ({_format_category(section.category)})")
    click.echo(section.url)
    click.echo("")
    click.echo(section.body)


@cli.command("clear-cache")
@click.option("--base", "base_path", default=".", type=click.Path(exists=True), help="Directory holding .docsieve/.")
def clear_cache(base_path):
    """Remove the cached docs copy."""
    from pathlib import Path

    from docsieve.config import cache_dir
    from docsieve.sources.cache import FileCache

    base = Path(base_path).resolve()
    settings = _resolve(base)
    FileCache(cache_dir(base)).remove(settings.cache_key)
    click.echo("Cache cleared. Docs will be refetched on next load.")
