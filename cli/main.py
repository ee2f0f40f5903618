# cli/main.py
import logging
import click
from .commands.genre import genre, init_db

@click.group()
@click.option('--database-url', envvar='DATABASE_URL', default=None,
              help='Database connection string (defaults to DATABASE_URL or sqlite:///genres.db)')
@click.option('--log-level', envvar='GENRE_ATLAS_LOG_LEVEL', default='WARNING',
              help='Logging level')
@click.pass_context
def cli(ctx, database_url: str, log_level: str):
    """Genre Atlas CLI"""
    logging.basicConfig(level=log_level.upper())
    ctx.ensure_object(dict)
    ctx.obj['database_url'] = database_url

cli.add_command(init_db)
cli.add_command(genre)

def main():
    """Entry point for the CLI"""
    cli()

if __name__ == '__main__':
    main()
