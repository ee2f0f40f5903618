import click
from atlas.graph import GenreGraph
from atlas.graph.errors import (
    DuplicateAkaError, GenreCycleError, GenreNotFoundError,
    InvalidGenreRelevanceError
)
from atlas.graph.types import GenreType, get_genre_relevance_text, UNSET_GENRE_RELEVANCE
from atlas.sa.store import SqlGenreStore
from atlas.services.genre_service import GenreService
from ..utils import get_database, parse_id_list, format_genre, echo_genres, echo_error

GENRE_TYPES = [genre_type.value for genre_type in GenreType]

@click.command(name='init-db')
@click.pass_context
def init_db(ctx):
    """Create the database tables"""
    db = get_database(ctx)
    db.init_db()
    click.echo(click.style("Database initialized", fg='green'))

@click.group()
def genre():
    """Genre management commands"""
    pass

@genre.command()
@click.argument('name')
@click.option('--subtitle', default=None, help='Disambiguating subtitle')
@click.option('--type', 'genre_type', type=click.Choice(GENRE_TYPES), default='STYLE', help='Genre type')
@click.option('--nsfw/--no-nsfw', default=False, help='Mark the genre as NSFW')
@click.option('--parents', default=None, help='Comma-separated parent genre IDs')
@click.option('--children', default=None, help='Comma-separated child genre IDs')
@click.option('--derived-from', default=None, help='Comma-separated IDs of genres this derives from')
@click.option('--aka', 'akas', multiple=True, help='Primary alternate name (repeatable)')
@click.option('--account-id', default=None, type=int, help='Account recorded in history')
@click.pass_context
def create(ctx, name, subtitle, genre_type, nsfw, parents, children, derived_from, akas, account_id):
    """Create a genre

    Example:
        genre-atlas genre create "Shoegaze" --parents 3 --aka "Shoegazing"
    """
    db = get_database(ctx)
    data = {
        'name': name,
        'subtitle': subtitle,
        'type': genre_type,
        'nsfw': nsfw,
        'parents': parse_id_list(parents) or [],
        'children': parse_id_list(children),
        'derived_from': parse_id_list(derived_from) or [],
        'akas': {'primary': list(akas)},
    }

    with db.get_db() as session:
        try:
            created = GenreService(session).create_genre(data, account_id)
        except (ValueError, DuplicateAkaError, GenreCycleError, GenreNotFoundError) as e:
            echo_error(str(e))
            ctx.exit(1)
        click.echo(click.style("Created genre ", fg='green') +
                   click.style(f"{created.name} (ID: {created.id})", fg='cyan'))

@genre.command()
@click.argument('genre_id', type=int)
@click.option('--name', default=None, help='New name')
@click.option('--subtitle', default=None, help='New subtitle')
@click.option('--type', 'genre_type', type=click.Choice(GENRE_TYPES), default=None, help='New genre type')
@click.option('--parents', default=None, help='Comma-separated parent genre IDs (replaces existing, "" for none)')
@click.option('--children', default=None, help='Comma-separated child genre IDs (replaces existing)')
@click.option('--derived-from', default=None, help='Comma-separated IDs of genres this derives from')
@click.option('--account-id', default=None, type=int, help='Account recorded in history')
@click.pass_context
def edit(ctx, genre_id, name, subtitle, genre_type, parents, children, derived_from, account_id):
    """Edit a genre; only the given options change"""
    db = get_database(ctx)
    data = {}
    if name is not None:
        data['name'] = name
    if subtitle is not None:
        data['subtitle'] = subtitle
    if genre_type is not None:
        data['type'] = genre_type
    for key, value in (('parents', parents), ('children', children), ('derived_from', derived_from)):
        if value is not None:
            data[key] = parse_id_list(value)

    with db.get_db() as session:
        try:
            updated = GenreService(session).update_genre(genre_id, data, account_id)
        except (ValueError, DuplicateAkaError, GenreCycleError, GenreNotFoundError) as e:
            echo_error(str(e))
            ctx.exit(1)
        click.echo(click.style("Updated genre ", fg='green') +
                   click.style(f"{updated.name} (ID: {updated.id})", fg='cyan'))

@genre.command()
@click.argument('genre_id', type=int)
@click.option('--account-id', default=None, type=int, help='Account recorded in history')
@click.confirmation_option(prompt='Delete this genre? Its children move up to its parents.')
@click.pass_context
def delete(ctx, genre_id, account_id):
    """Delete a genre, moving its children under its parents"""
    db = get_database(ctx)
    with db.get_db() as session:
        try:
            moved = GenreService(session).delete_genre(genre_id, account_id)
        except GenreNotFoundError as e:
            echo_error(str(e))
            ctx.exit(1)
    click.echo(click.style(f"Deleted genre {genre_id}", fg='green'))
    if moved:
        click.echo(click.style("Re-parented children: ", fg='blue') +
                   click.style(", ".join(str(i) for i in moved), fg='cyan'))

@genre.command()
@click.pass_context
def roots(ctx):
    """List root genres"""
    db = get_database(ctx)
    with db.get_db() as session:
        echo_genres(GenreGraph(SqlGenreStore(session)).get_root_genres(), "No root genres found.")

@genre.command()
@click.argument('genre_id', type=int)
@click.option('--derivations', is_flag=True, help='List derivations instead of children')
@click.pass_context
def children(ctx, genre_id, derivations):
    """List the children (or derivations) of a genre"""
    db = get_database(ctx)
    with db.get_db() as session:
        graph = GenreGraph(SqlGenreStore(session))
        if derivations:
            echo_genres(graph.get_derivations(genre_id), f"No genres derive from {genre_id}.")
        else:
            echo_genres(graph.get_children(genre_id), f"Genre {genre_id} has no children.")

@genre.command()
@click.argument('genre_id', type=int)
@click.pass_context
def path(ctx, genre_id):
    """Show the shortest path from a root genre to GENRE_ID"""
    db = get_database(ctx)
    with db.get_db() as session:
        graph = GenreGraph(SqlGenreStore(session))
        genre_path = graph.get_path_to_genre(genre_id)
        if genre_path is None:
            echo_error(f"No path to genre {genre_id}")
            ctx.exit(1)
        names = [graph.get_genre(i).display_name for i in genre_path]
        click.echo(click.style(" → ".join(names), fg='cyan'))

@genre.command(name='validate-path')
@click.argument('steps', nargs=-1, required=True)
@click.pass_context
def validate_path(ctx, steps):
    """Check a breadcrumb path, e.g. `validate-path 1 4 derived 9`"""
    db = get_database(ctx)
    with db.get_db() as session:
        valid = GenreGraph(SqlGenreStore(session)).is_path_valid(list(steps))
    if valid:
        click.echo(click.style("Valid path", fg='green'))
    else:
        click.echo(click.style("Invalid path", fg='red'))
        ctx.exit(1)

@genre.command()
@click.argument('query')
@click.option('--limit', default=20, help='Maximum number of results')
@click.pass_context
def search(ctx, query, limit):
    """Fuzzy search genres by name and aka"""
    db = get_database(ctx)
    with db.get_db() as session:
        matches = GenreGraph(SqlGenreStore(session)).search_matches(query)[:limit]
    if not matches:
        click.echo(click.style(f"No genres match '{query}'.", fg='yellow'))
        return
    for match in matches:
        line = f" - {format_genre(match.genre)} " + click.style(f"{match.weight:.2f}", fg='green')
        if match.matched_aka:
            line += click.style(f" (aka {match.matched_aka})", fg='blue')
        click.echo(line)

@genre.command()
@click.argument('genre_id', type=int)
@click.argument('relevance', type=int)
@click.option('--account-id', required=True, type=int, help='Voting account')
@click.pass_context
def vote(ctx, genre_id, relevance, account_id):
    """Vote on a genre's relevance (0-7, or 99 to withdraw)"""
    db = get_database(ctx)
    with db.get_db() as session:
        try:
            new_relevance = GenreService(session).vote_relevance(genre_id, relevance, account_id)
        except (GenreNotFoundError, InvalidGenreRelevanceError) as e:
            echo_error(str(e))
            ctx.exit(1)
    label = "Unset" if new_relevance == UNSET_GENRE_RELEVANCE else get_genre_relevance_text(new_relevance)
    click.echo(click.style(f"Genre {genre_id} relevance: ", fg='blue') +
               click.style(f"{new_relevance} ({label})", fg='cyan'))

@genre.command()
@click.argument('genre_id', type=int)
@click.pass_context
def history(ctx, genre_id):
    """Show the change history of a genre"""
    db = get_database(ctx)
    with db.get_db() as session:
        entries = GenreService(session).get_history(genre_id)
        if not entries:
            click.echo(click.style(f"No history for genre {genre_id}.", fg='yellow'))
            return
        for entry in entries:
            click.echo(click.style(f"{entry.created_at:%Y-%m-%d %H:%M} ", fg='blue') +
                       click.style(f"{entry.operation:<6} ", fg='green') +
                       f"{entry.name} parents={entry.parent_ids}")

if __name__ == '__main__':
    genre()
