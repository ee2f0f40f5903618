import click
from typing import Iterable, List, Optional
from atlas.graph.types import TreeGenre
from atlas.sa.database import Database

def get_database(ctx: click.Context) -> Database:
    """Create a Database from the --database-url given to the top-level group"""
    obj = ctx.find_root().obj or {}
    return Database(obj.get('database_url'))

def parse_id_list(value: Optional[str]) -> Optional[List[int]]:
    """Parse '1,2,3' into [1, 2, 3]. None stays None, '' becomes []."""
    if value is None:
        return None
    try:
        return [int(part) for part in value.split(',') if part.strip()]
    except ValueError:
        raise click.BadParameter(f"Expected comma-separated genre IDs, got '{value}'")

def format_genre(genre: TreeGenre) -> str:
    """Format a genre as 'Name [Subtitle] (ID: 3, STYLE)'"""
    return (click.style(genre.display_name, fg='cyan') +
            click.style(f" (ID: {genre.id}, {genre.type.value})", fg='blue'))

def echo_genres(genres: Iterable[TreeGenre], empty_message: str) -> None:
    genres = list(genres)
    if not genres:
        click.echo(click.style(empty_message, fg='yellow'))
        return
    for genre in genres:
        click.echo(f" - {format_genre(genre)}")

def echo_error(message: str) -> None:
    click.echo(click.style(message, fg='red'), err=True)
